"""
Template composition: fills ``{{key}}`` placeholders from a LeaseCreationData
bag and inserts a generated details block under the document's first
top-level heading.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional
from uuid import UUID

from django.utils import timezone

from leases.exceptions import InvalidTemplate

PLACEHOLDER_RE = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")
TOP_LEVEL_HEADING_RE = re.compile(r"^# .*$", re.MULTILINE)
NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class LeaseCreationData:
    growing_year: int
    lease_id: Optional[UUID] = None
    property_name: Optional[str] = None
    farmer_name: Optional[str] = None
    lease_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rent_amount: Optional[Decimal] = None
    rent_frequency: Optional[str] = None

    @classmethod
    def from_lease(cls, lease) -> "LeaseCreationData":
        return cls(
            growing_year=lease.growing_year,
            lease_id=lease.reference,
            property_name=lease.property.name,
            farmer_name=lease.farmer.name,
            lease_type=lease.lease_type,
            start_date=lease.start_date,
            end_date=lease.end_date,
            rent_amount=lease.rent_amount,
            rent_frequency=lease.rent_frequency,
        )


def format_date(value: date | None) -> str:
    return value.isoformat() if value else ""


def format_amount(value: Decimal | None) -> str:
    if value is None:
        return ""
    return f"{Decimal(value):.2f}"


def _text(value) -> str:
    return "" if value is None else str(value)


PLACEHOLDERS: dict[str, Callable[[LeaseCreationData], str]] = {
    "lease_id": lambda d: _text(d.lease_id),
    "property_name": lambda d: _text(d.property_name),
    "farmer_name": lambda d: _text(d.farmer_name),
    "growing_year": lambda d: _text(d.growing_year),
    "lease_type": lambda d: _text(d.lease_type),
    "start_date": lambda d: format_date(d.start_date),
    "end_date": lambda d: format_date(d.end_date),
    "rent_amount": lambda d: format_amount(d.rent_amount),
    "rent_frequency": lambda d: _text(d.rent_frequency),
}


def substitute_placeholders(text: str, data: LeaseCreationData) -> str:
    """Single pass; unknown tokens are left verbatim and substituted values are never rescanned."""

    def _replace(match: re.Match) -> str:
        accessor = PLACEHOLDERS.get(match.group(1))
        if accessor is None:
            return match.group(0)
        return accessor(data)

    return PLACEHOLDER_RE.sub(_replace, text)


def build_header(data: LeaseCreationData, created_at: datetime) -> str:
    lines = [
        "",
        "## Lease Agreement Details",
        f"- **Lease ID:** {data.lease_id or NOT_AVAILABLE}",
        f"- **Property:** {data.property_name or NOT_AVAILABLE}",
        f"- **Farmer:** {data.farmer_name or NOT_AVAILABLE}",
        f"- **Created:** {created_at.isoformat(timespec='minutes')}",
        f"- **Growing Year:** {data.growing_year}",
        "",
    ]
    return "\n".join(lines) + "\n"


def compose(template_text: str, data: LeaseCreationData, *, created_at: datetime | None = None) -> str:
    heading = TOP_LEVEL_HEADING_RE.search(template_text)
    if heading is None:
        raise InvalidTemplate("missing a top-level '# ' heading")

    created_at = created_at or timezone.now()
    body = substitute_placeholders(template_text, data)
    # Substitution can shift offsets, so locate the heading again in the result.
    heading = TOP_LEVEL_HEADING_RE.search(body)
    insert_at = heading.end()
    if insert_at < len(body) and body[insert_at] == "\n":
        insert_at += 1
        prefix = body[:insert_at]
    else:
        prefix = body[:insert_at] + "\n"
    return prefix + build_header(data, created_at) + body[insert_at:]
