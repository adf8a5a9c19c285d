"""
Text exports for ledger slices, lease summaries and payment schedules.

Everything here is a pure function of its inputs: nothing is written to
storage and nothing is shared. Markdown groups use the local day boundary;
CSV dates and times are always rendered in UTC so the files stay
machine-parseable regardless of locale.
"""
from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from enum import Enum
from itertools import groupby
from typing import Iterable, Sequence

from django.utils import timezone

LEDGER_CSV_HEADER = (
    "Date,Time,Account Code,Account Name,Description,Debit Amount,"
    "Credit Amount,Reference Number,Vendor,Reconciled,Approved"
)
SCHEDULE_CSV_HEADER = "Sequence,Due Date,Amount,Status,Paid Date,Reference Number"
NO_DATE_TITLE = "No Date"


class ExportFormat(str, Enum):
    MARKDOWN = "markdown"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return "md" if self is ExportFormat.MARKDOWN else "csv"

    @property
    def content_type(self) -> str:
        return "text/markdown" if self is ExportFormat.MARKDOWN else "text/csv"


def format_currency(amount) -> str:
    return f"${Decimal(amount or 0):,.2f}"


def _csv_number(amount) -> str:
    if amount is None:
        return ""
    return f"{Decimal(amount):.2f}"


def _md_cell(value) -> str:
    return str(value or "").replace("|", "\\|").replace("\n", " ")


def _newest_first(entries: Iterable) -> list:
    dated = [e for e in entries if e.posted_at is not None]
    undated = [e for e in entries if e.posted_at is None]
    return sorted(dated, key=lambda e: e.posted_at, reverse=True) + undated


def _local_day(entry) -> date | None:
    if entry.posted_at is None:
        return None
    return timezone.localtime(entry.posted_at).date()


def ledger_to_markdown(
    entries: Sequence,
    *,
    generated_at: datetime | None = None,
    date_range: tuple[date, date] | None = None,
) -> str:
    generated_at = generated_at or timezone.now()
    ordered = _newest_first(list(entries))

    parts = [
        "# General Ledger Export",
        "",
        f"**Export Date:** {timezone.localtime(generated_at):%A, %B %d, %Y %H:%M}",
        f"**Total Entries:** {len(ordered)}",
        "",
    ]
    if date_range:
        start, end = date_range
        parts += [f"**Date Range:** {start.isoformat()} to {end.isoformat()}", ""]

    for day, day_entries in groupby(ordered, key=_local_day):
        title = NO_DATE_TITLE if day is None else f"{day:%A, %B %d, %Y}"
        parts += [
            f"## {title}",
            "",
            "| Time | Account | Description | Debit | Credit | Reference |",
            "|------|---------|-------------|-------|--------|-----------|",
        ]
        for entry in day_entries:
            time_label = f"{timezone.localtime(entry.posted_at):%H:%M}" if entry.posted_at else ""
            debit = format_currency(entry.debit_amount) if (entry.debit_amount or 0) > 0 else ""
            credit = format_currency(entry.credit_amount) if (entry.credit_amount or 0) > 0 else ""
            account = f"{entry.account_code} - {entry.account_name}"
            parts.append(
                f"| {time_label} | {_md_cell(account)} | {_md_cell(entry.description)} "
                f"| {debit} | {credit} | {_md_cell(entry.reference_number)} |"
            )
        parts.append("")

    return "\n".join(parts) + "\n"


def ledger_to_csv(entries: Sequence) -> str:
    output = io.StringIO()
    output.write(LEDGER_CSV_HEADER + "\n")
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for entry in _newest_first(list(entries)):
        posted = entry.posted_at.astimezone(dt_timezone.utc) if entry.posted_at else None
        writer.writerow(
            [
                f"{posted:%Y-%m-%d}" if posted else "",
                f"{posted:%H:%M}" if posted else "",
                entry.account_code or "",
                entry.account_name or "",
                entry.description or "",
                _csv_number(entry.debit_amount),
                _csv_number(entry.credit_amount),
                entry.reference_number or "",
                entry.vendor_name or "",
                "Yes" if entry.is_reconciled else "No",
                "Yes" if entry.is_approved else "No",
            ]
        )
    return output.getvalue()


def export_ledger(
    entries: Sequence,
    fmt: ExportFormat | str,
    *,
    generated_at: datetime | None = None,
    date_range: tuple[date, date] | None = None,
) -> str:
    fmt = ExportFormat(fmt)
    if fmt is ExportFormat.CSV:
        return ledger_to_csv(entries)
    return ledger_to_markdown(entries, generated_at=generated_at, date_range=date_range)


def export_payment_schedule_csv(payments: Sequence) -> str:
    output = io.StringIO()
    output.write(SCHEDULE_CSV_HEADER + "\n")
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for payment in sorted(payments, key=lambda p: p.sequence):
        writer.writerow(
            [
                payment.sequence,
                payment.due_date.isoformat(),
                _csv_number(payment.amount),
                payment.status,
                payment.paid_date.isoformat() if payment.paid_date else "",
                payment.reference_number or "",
            ]
        )
    return output.getvalue()


def render_lease_summary(lease, payments: Sequence, *, generated_at: datetime | None = None) -> str:
    """Property-owner summary of a lease, suitable for tax and accounting records."""
    generated_at = generated_at or timezone.now()
    prop = lease.property
    farmer = lease.farmer
    ordered = sorted(payments, key=lambda p: p.sequence)
    received = sum((p.amount for p in ordered if p.is_paid), Decimal("0.00"))
    scheduled = sum((p.amount for p in ordered), Decimal("0.00"))

    lines = [
        "# Lease Agreement Summary for Property Owner",
        "",
        f"**Generated:** {timezone.localtime(generated_at):%A, %B %d, %Y %H:%M}",
        f"**Property:** {prop.name}",
        f"**Tenant:** {farmer.name}",
        "",
        "---",
        "",
        "## Lease Details",
        "",
        "### Property Information",
        f"- **Property Name:** {prop.name}",
        f"- **County:** {prop.county or 'N/A'}",
        f"- **State:** {prop.state or 'N/A'}",
        f"- **Total Acres:** {Decimal(prop.total_acres or 0):.1f} acres",
        f"- **Tillable Acres:** {Decimal(prop.tillable_acres or 0):.1f} acres",
        "",
        "### Tenant Information",
        f"- **Farmer/Tenant:** {farmer.name}",
        f"- **Organization:** {farmer.org_name or 'N/A'}",
        f"- **Phone:** {farmer.phone or 'N/A'}",
        f"- **Email:** {farmer.email or 'N/A'}",
        "",
        "### Lease Terms",
        f"- **Lease Type:** {lease.get_lease_type_display()}",
        f"- **Start Date:** {lease.start_date.isoformat()}",
        f"- **End Date:** {lease.end_date.isoformat()}",
        f"- **Growing Year:** {lease.growing_year}",
        f"- **Status:** {lease.get_status_display()}",
        "",
        "### Financial Terms",
        f"- **Rent Amount:** {format_currency(lease.rent_amount)}",
        f"- **Payment Frequency:** {lease.get_rent_frequency_display()}",
        "",
        "## Payment Record",
        "",
        "| # | Due Date | Amount Due | Status | Paid Date | Reference |",
        "|---|----------|------------|--------|-----------|-----------|",
    ]
    if not ordered:
        lines.append("| | No payments scheduled | | | | |")
    for payment in ordered:
        lines.append(
            f"| {payment.sequence} | {payment.due_date.isoformat()} | {format_currency(payment.amount)} "
            f"| {payment.get_status_display()} | {payment.paid_date.isoformat() if payment.paid_date else ''} "
            f"| {_md_cell(payment.reference_number)} |"
        )
    lines += [
        "",
        f"**Total Scheduled:** {format_currency(scheduled)}",
        f"**Payments Received to Date:** {format_currency(received)}",
        f"**Balance Due:** {format_currency(scheduled - received)}",
        "",
        "## Agreement Document",
        "",
    ]
    if lease.agreement_file_name:
        lines += [
            f"- **File:** {lease.agreement_file_name}",
            f"- **Audit Hash:** `{lease.agreement_hash}`",
            f"- **Short Reference:** `{lease.agreement_hash[:8]}`",
        ]
    else:
        lines.append("No completed agreement on file.")
    if lease.notes:
        lines += ["", "## Notes", "", lease.notes]
    lines += [
        "",
        "---",
        "",
        "This summary is computer generated for record keeping. Refer to the signed agreement for complete terms.",
    ]
    return "\n".join(lines) + "\n"
