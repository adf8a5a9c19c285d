from __future__ import annotations

from datetime import date, timedelta

from django.db.models import QuerySet
from django.utils import timezone

from leases.models import Lease, Payment, Property


def _open_payments() -> QuerySet:
    return Payment.objects.filter(is_paid=False, lease__status=Lease.Status.ACTIVE).select_related(
        "lease", "lease__property", "lease__farmer"
    )


def upcoming_payments(within_days: int = 30, today: date | None = None) -> QuerySet:
    today = today or timezone.localdate()
    return _open_payments().filter(
        due_date__gte=today,
        due_date__lte=today + timedelta(days=within_days),
    ).order_by("due_date", "lease_id", "sequence")


def overdue_payments(today: date | None = None) -> QuerySet:
    today = today or timezone.localdate()
    return _open_payments().filter(due_date__lt=today).order_by("due_date", "lease_id", "sequence")


def has_active_lease_coverage(property: Property, on_date: date | None = None) -> bool:
    on_date = on_date or timezone.localdate()
    return Lease.objects.filter(
        property=property,
        status=Lease.Status.ACTIVE,
        start_date__lte=on_date,
        end_date__gte=on_date,
    ).exists()
