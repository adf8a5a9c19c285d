import csv
import io
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

from django.test import SimpleTestCase, TestCase, override_settings

from leases.models import LedgerEntry
from leases.services.exports import (
    LEDGER_CSV_HEADER,
    SCHEDULE_CSV_HEADER,
    ExportFormat,
    export_ledger,
    export_payment_schedule_csv,
    format_currency,
    ledger_to_csv,
    ledger_to_markdown,
    render_lease_summary,
)
from leases.services.settlement import mark_payment_paid
from leases.tests.helpers import make_lease, make_parties

GENERATED_AT = datetime(2025, 1, 10, 8, 0, tzinfo=dt_timezone.utc)


def entry(posted_at, description, credit="0", debit="0", **extra):
    fields = {
        "posted_at": posted_at,
        "account_code": "4000",
        "account_name": "Lease Revenue",
        "entry_type": LedgerEntry.EntryType.REVENUE,
        "description": description,
        "debit_amount": Decimal(debit),
        "credit_amount": Decimal(credit),
    }
    fields.update(extra)
    return LedgerEntry(**fields)


@override_settings(TIME_ZONE="UTC")
class LedgerExportTests(SimpleTestCase):
    def setUp(self):
        self.older = entry(datetime(2024, 3, 1, 9, 15, tzinfo=dt_timezone.utc), "Lease payment for North Forty", credit="1000.00", reference_number="CHK-1")
        self.newer = entry(
            datetime(2024, 3, 2, 14, 45, tzinfo=dt_timezone.utc),
            'Payment for "South" field, second half',
            credit="2500.50",
            vendor_name="Jensen Farms",
            is_reconciled=True,
        )
        self.reversal = entry(datetime(2024, 3, 2, 16, 0, tzinfo=dt_timezone.utc), "Reversal of lease payment", debit="1000.00")
        self.entries = [self.older, self.newer, self.reversal]

    def test_csv_header_and_column_order(self):
        lines = ledger_to_csv(self.entries).splitlines()
        self.assertEqual(lines[0], LEDGER_CSV_HEADER)
        self.assertEqual(
            lines[0],
            "Date,Time,Account Code,Account Name,Description,Debit Amount,Credit Amount,Reference Number,Vendor,Reconciled,Approved",
        )
        self.assertEqual(
            lines[-1],
            '"2024-03-01","09:15","4000","Lease Revenue","Lease payment for North Forty","0.00","1000.00","CHK-1","","No","No"',
        )

    def test_csv_doubles_embedded_quotes(self):
        output = ledger_to_csv([self.newer])
        self.assertIn('"Payment for ""South"" field, second half"', output)

    def test_csv_round_trip_preserves_amounts_and_dates(self):
        rows = list(csv.reader(io.StringIO(ledger_to_csv(self.entries))))
        self.assertEqual(rows[0], LEDGER_CSV_HEADER.split(","))
        body = rows[1:]
        # newest first
        self.assertEqual([r[0] for r in body], ["2024-03-02", "2024-03-02", "2024-03-01"])
        self.assertEqual([r[1] for r in body], ["16:00", "14:45", "09:15"])
        self.assertEqual([Decimal(r[5]) for r in body], [Decimal("1000.00"), Decimal("0"), Decimal("0")])
        self.assertEqual([Decimal(r[6]) for r in body], [Decimal("0"), Decimal("2500.50"), Decimal("1000.00")])
        self.assertEqual(body[1][4], 'Payment for "South" field, second half')
        self.assertEqual((body[1][8], body[1][9], body[1][10]), ("Jensen Farms", "Yes", "No"))

    @override_settings(TIME_ZONE="America/Chicago")
    def test_csv_times_are_utc_regardless_of_local_zone(self):
        late = entry(datetime(2024, 3, 2, 2, 30, tzinfo=dt_timezone.utc), "Late evening in Iowa", credit="10")
        row = list(csv.reader(io.StringIO(ledger_to_csv([late]))))[1]
        self.assertEqual(row[:2], ["2024-03-02", "02:30"])

    def test_markdown_groups_by_day_newest_first(self):
        undated = entry(None, "Unposted adjustment", credit="5.00")
        output = ledger_to_markdown(self.entries + [undated], generated_at=GENERATED_AT)

        self.assertTrue(output.startswith("# General Ledger Export\n"))
        self.assertIn("**Total Entries:** 4", output)
        self.assertIn("| Time | Account | Description | Debit | Credit | Reference |", output)
        march_2 = output.index("## Saturday, March 02, 2024")
        march_1 = output.index("## Friday, March 01, 2024")
        no_date = output.index("## No Date")
        self.assertLess(march_2, march_1)
        self.assertLess(march_1, no_date)
        self.assertLess(output.index("| 16:00 |"), output.index("| 14:45 |"))

    def test_markdown_rows_show_only_the_posted_side(self):
        output = ledger_to_markdown([self.older], generated_at=GENERATED_AT)
        self.assertIn(
            "| 09:15 | 4000 - Lease Revenue | Lease payment for North Forty |  | $1,000.00 | CHK-1 |",
            output,
        )

    def test_markdown_date_range_line(self):
        output = ledger_to_markdown([], generated_at=GENERATED_AT, date_range=(date(2024, 1, 1), date(2024, 3, 31)))
        self.assertIn("**Date Range:** 2024-01-01 to 2024-03-31", output)
        self.assertIn("**Total Entries:** 0", output)

    def test_export_ledger_selects_format(self):
        self.assertTrue(export_ledger(self.entries, "csv").startswith(LEDGER_CSV_HEADER))
        self.assertTrue(
            export_ledger(self.entries, ExportFormat.MARKDOWN, generated_at=GENERATED_AT).startswith("# General Ledger Export")
        )
        with self.assertRaises(ValueError):
            export_ledger(self.entries, "pdf")

    def test_export_is_pure(self):
        first = export_ledger(self.entries, "markdown", generated_at=GENERATED_AT)
        second = export_ledger(self.entries, "markdown", generated_at=GENERATED_AT)
        self.assertEqual(first, second)

    def test_format_currency(self):
        self.assertEqual(format_currency(Decimal("1234.5")), "$1,234.50")
        self.assertEqual(format_currency(None), "$0.00")


class ScheduleAndSummaryExportTests(TestCase):
    def setUp(self):
        self.property, self.farmer = make_parties()
        self.lease = make_lease(
            self.property,
            self.farmer,
            rent_frequency="quarterly",
            notes="Tile drainage repaired in 2023.",
        )

    def test_schedule_csv(self):
        first = self.lease.payments.get(sequence=1)
        mark_payment_paid(first, date(2024, 1, 2), reference_number="CHK-77")
        output = export_payment_schedule_csv(list(self.lease.payments.all()))

        lines = output.splitlines()
        self.assertEqual(lines[0], SCHEDULE_CSV_HEADER)
        self.assertEqual(lines[1], '"1","2024-01-01","3000.00","paid","2024-01-02","CHK-77"')
        self.assertEqual(lines[4], '"4","2024-10-01","3000.00","pending","",""')

    def test_lease_summary(self):
        mark_payment_paid(self.lease.payments.get(sequence=1), date(2024, 1, 2))
        summary = render_lease_summary(self.lease, list(self.lease.payments.all()), generated_at=GENERATED_AT)

        self.assertTrue(summary.startswith("# Lease Agreement Summary for Property Owner\n"))
        self.assertIn("- **Property Name:** North Forty", summary)
        self.assertIn("- **Tillable Acres:** 148.5 acres", summary)
        self.assertIn("- **Payment Frequency:** Quarterly", summary)
        self.assertIn("**Total Scheduled:** $12,000.00", summary)
        self.assertIn("**Payments Received to Date:** $3,000.00", summary)
        self.assertIn("**Balance Due:** $9,000.00", summary)
        self.assertIn("No completed agreement on file.", summary)
        self.assertIn("Tile drainage repaired in 2023.", summary)
        self.assertEqual(summary.count("| Pending |"), 3)

    def test_summary_references_agreement_hash(self):
        self.lease.agreement_file_name = "2024-01-01_Working_Cash_Rent_aaaa1111_bbbb2222.md"
        self.lease.agreement_hash = "c" * 64
        summary = render_lease_summary(self.lease, [], generated_at=GENERATED_AT)
        self.assertIn("- **Short Reference:** `cccccccc`", summary)
        self.assertIn("| | No payments scheduled | | | | |", summary)
