import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

from django.test import override_settings

from leases.models import Farmer, Lease, Property, RentFrequency
from leases.services.repository import TemplateRepository
from leases.services.scheduling import materialize_schedule


class LeaseStorageMixin:
    """Points LEASE_STORAGE_ROOT at a throwaway directory for each test."""

    def setUp(self):
        super().setUp()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.storage_root = Path(tmp.name)
        override = override_settings(LEASE_STORAGE_ROOT=self.storage_root)
        override.enable()
        self.addCleanup(override.disable)
        self.repository = TemplateRepository(self.storage_root)


def make_parties(property_name="North Forty", farmer_name="Dale Jensen"):
    prop = Property.objects.create(
        name=property_name,
        county="Story",
        state="IA",
        total_acres=Decimal("160.00"),
        tillable_acres=Decimal("148.50"),
    )
    farmer = Farmer.objects.create(name=farmer_name, org_name="Jensen Farms LLC", email="dale@example.com")
    return prop, farmer


def make_lease(prop, farmer, *, schedule=True, **overrides):
    fields = {
        "property": prop,
        "farmer": farmer,
        "lease_type": Lease.LeaseType.CASH_RENT,
        "start_date": date(2024, 1, 1),
        "end_date": date(2024, 12, 31),
        "growing_year": 2024,
        "rent_amount": Decimal("12000.00"),
        "rent_frequency": RentFrequency.MONTHLY,
    }
    fields.update(overrides)
    lease = Lease.objects.create(**fields)
    if schedule:
        materialize_schedule(lease)
    return lease
