from __future__ import annotations

import logging
from datetime import date, datetime

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from leases.exceptions import PaymentStateError
from leases.models import Lease, LedgerEntry, Payment

logger = logging.getLogger(__name__)


def revenue_account() -> tuple[str, str]:
    return settings.LEASE_REVENUE_ACCOUNT_CODE, settings.LEASE_REVENUE_ACCOUNT_NAME


def _posting_timestamp(on_date: date) -> datetime:
    now = timezone.localtime()
    if on_date == now.date():
        return now
    return timezone.make_aware(datetime.combine(on_date, now.time().replace(microsecond=0)))


def _locked(payment: Payment) -> Payment:
    return Payment.objects.select_for_update().select_related("lease", "lease__property").get(pk=payment.pk)


@transaction.atomic
def mark_payment_paid(
    payment: Payment,
    paid_date: date | None = None,
    *,
    reference_number: str | None = None,
) -> LedgerEntry:
    """
    Settle a payment and post its revenue entry in one transaction.

    Calling this on an already-paid payment is a no-op that returns the
    existing entry; a second revenue entry is never posted.
    """
    locked = _locked(payment)
    if locked.is_paid:
        entry = locked.ledger_entry
        if entry is not None:
            logger.info("Payment %s already paid; skipping ledger posting", locked.pk)
            _refresh(payment, locked)
            return entry

    lease = locked.lease
    if lease.status == Lease.Status.VOID:
        raise PaymentStateError("Cannot settle a payment on a void lease.")

    paid_date = paid_date or timezone.localdate()
    if paid_date < lease.start_date:
        raise PaymentStateError(
            f"Paid date {paid_date.isoformat()} is before the lease start date {lease.start_date.isoformat()}."
        )

    if reference_number is not None:
        locked.reference_number = reference_number
    locked.is_paid = True
    locked.paid_date = paid_date
    locked.status = Payment.Status.PAID
    locked.save(update_fields=["is_paid", "paid_date", "status", "reference_number"])

    account_code, account_name = revenue_account()
    entry = LedgerEntry.objects.create(
        lease=lease,
        payment=locked,
        posted_at=_posting_timestamp(paid_date),
        debit_amount=0,
        credit_amount=locked.amount,
        account_code=account_code,
        account_name=account_name,
        entry_type=LedgerEntry.EntryType.REVENUE,
        description=f"Lease payment for {lease.property.name}",
        reference_number=locked.reference_number,
    )
    logger.info("Posted revenue entry %s for payment %s (%s)", entry.pk, locked.pk, locked.amount)
    _refresh(payment, locked)
    return entry


@transaction.atomic
def mark_payment_unpaid(payment: Payment) -> LedgerEntry:
    """
    Reverse a settlement: the revenue entry is voided (kept for audit) and a
    mirror reversal entry is posted. Returns the reversal entry.
    """
    locked = _locked(payment)
    if not locked.is_paid:
        raise PaymentStateError("Payment is not paid; nothing to reverse.")

    original = (
        LedgerEntry.objects.select_for_update()
        .filter(payment=locked, entry_type=LedgerEntry.EntryType.REVENUE, is_void=False)
        .first()
    )
    if original is None:
        raise PaymentStateError("Paid payment has no active revenue entry to reverse.")

    original.is_void = True
    original.save(update_fields=["is_void"])
    reversal = LedgerEntry.objects.create(
        lease=locked.lease,
        payment=locked,
        posted_at=timezone.now(),
        debit_amount=original.credit_amount,
        credit_amount=0,
        account_code=original.account_code,
        account_name=original.account_name,
        entry_type=LedgerEntry.EntryType.REVERSAL,
        description=f"Reversal of lease payment for {locked.lease.property.name}",
        reference_number=original.reference_number,
        reversal_of=original,
    )

    locked.is_paid = False
    locked.paid_date = None
    locked.status = Payment.Status.PENDING
    locked.save(update_fields=["is_paid", "paid_date", "status"])

    logger.info("Reversed revenue entry %s for payment %s", original.pk, locked.pk)
    _refresh(payment, locked)
    return reversal


def _refresh(target: Payment, source: Payment) -> None:
    if target is source:
        return
    for field in ("is_paid", "paid_date", "status", "reference_number"):
        setattr(target, field, getattr(source, field))
