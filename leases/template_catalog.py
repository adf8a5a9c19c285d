"""
Stock agricultural lease templates written into the Templates tier on first run.
"""

SIGNATURES = """\
## Signatures
- **Landlord/Owner:** ______________________ **Date:** __________
- **Tenant/Farmer:** {{farmer_name}} ______________________ **Date:** __________
"""

CASH_RENT = f"""\
# Cash Rent Agricultural Lease Agreement

**Lease Type:** Cash Rent
**Growing Year:** {{{{growing_year}}}}

## Section 1: Parties and Property
- **Farmer/Tenant:** {{{{farmer_name}}}}
- **Property Name:** {{{{property_name}}}}
- **Legal Description:** [To be filled]

## Section 2: Lease Terms
- **Start Date:** {{{{start_date}}}}
- **End Date:** {{{{end_date}}}}
- **Total Rent:** ${{{{rent_amount}}}}
- **Payment Frequency:** {{{{rent_frequency}}}}
- **Late Payment Fee:** [To be specified]

## Section 3: Use and Restrictions
The tenant shall use the property for agricultural production only and follow
accepted conservation practices for the {{{{growing_year}}}} season.

## Section 4: Termination and Renewal
Written notice of termination is due no later than September 1 preceding the
next growing season.

{SIGNATURES}"""

CROP_SHARE = f"""\
# Crop Share Agricultural Lease Agreement

**Lease Type:** Crop Share
**Growing Year:** {{{{growing_year}}}}

## Section 1: Share Arrangement
- **Property Name:** {{{{property_name}}}}
- **Farmer/Tenant:** {{{{farmer_name}}}}
- **Landlord Share:** ____%
- **Tenant Share:** ____%

## Section 2: Expense Sharing
Seed, fertilizer and crop protection costs are divided in the same proportion
as the crop unless listed otherwise below.

## Section 3: Settlements
- **Lease Period:** {{{{start_date}}}} to {{{{end_date}}}}
- **Minimum Cash Rent:** ${{{{rent_amount}}}} ({{{{rent_frequency}}}})

{SIGNATURES}"""

FLEXIBLE_CASH_RENT = f"""\
# Flexible Cash Rent Agricultural Lease Agreement

**Lease Type:** Flexible Cash Rent
**Growing Year:** {{{{growing_year}}}}

## Section 1: Base Rent
- **Property Name:** {{{{property_name}}}}
- **Farmer/Tenant:** {{{{farmer_name}}}}
- **Base Rent:** ${{{{rent_amount}}}}
- **Payment Frequency:** {{{{rent_frequency}}}}

## Section 2: Adjustments
Base rent is adjusted by the county average yield and harvest price for the
{{{{growing_year}}}} season, within the bonus cap agreed below.

- **Bonus Cap:** ____%

## Section 3: Lease Period
- **Start Date:** {{{{start_date}}}}
- **End Date:** {{{{end_date}}}}

{SIGNATURES}"""

PASTURE_GRAZING = f"""\
# Pasture Grazing Lease Agreement

**Lease Type:** Pasture / Grazing
**Growing Year:** {{{{growing_year}}}}

## Section 1: Pasture
- **Property Name:** {{{{property_name}}}}
- **Grazier:** {{{{farmer_name}}}}
- **Maximum Animal Units:** ______

## Section 2: Grazing Season
- **Turn-out:** {{{{start_date}}}}
- **Removal:** {{{{end_date}}}}
- **Rent:** ${{{{rent_amount}}}} ({{{{rent_frequency}}}})

## Section 3: Fences and Water
The grazier maintains fences and water sources in working order for the season.

{SIGNATURES}"""

CUSTOM_FARMING = f"""\
# Custom Farming Agreement

**Lease Type:** Custom Farming
**Growing Year:** {{{{growing_year}}}}

## Section 1: Parties
- **Landowner Property:** {{{{property_name}}}}
- **Custom Operator:** {{{{farmer_name}}}}

## Section 2: Services and Compensation
- **Services:** [Tillage / Planting / Harvest]
- **Compensation:** ${{{{rent_amount}}}} ({{{{rent_frequency}}}})
- **Agreement Period:** {{{{start_date}}}} to {{{{end_date}}}}

{SIGNATURES}"""

STOCK_TEMPLATES = {
    "Cash_Rent_Agricultural_Lease": CASH_RENT,
    "Crop_Share_Agricultural_Lease": CROP_SHARE,
    "Flexible_Cash_Rent_Lease": FLEXIBLE_CASH_RENT,
    "Pasture_Grazing_Lease": PASTURE_GRAZING,
    "Custom_Farming_Agreement": CUSTOM_FARMING,
}
