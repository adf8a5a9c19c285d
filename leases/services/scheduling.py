"""
Payment schedule generation.

``build_schedule`` is pure; ``materialize_schedule`` persists its result as
Payment rows for a lease.
"""
from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from django.db import transaction

from leases.exceptions import PaymentStateError
from leases.models import Lease, Payment, RentFrequency

logger = logging.getLogger(__name__)

MONEY_QUANT = Decimal("0.01")

STEP_MONTHS = {
    RentFrequency.MONTHLY: 1,
    RentFrequency.QUARTERLY: 3,
    RentFrequency.SEMI_ANNUAL: 6,
}


@dataclass(frozen=True)
class ScheduledPayment:
    sequence: int
    due_date: date
    amount: Decimal


def _add_months(d: date, months: int) -> date:
    month_index = (d.month - 1) + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, min(d.day, last_day))


def _normalize_frequency(frequency) -> str | None:
    if frequency is None:
        return None
    value = str(getattr(frequency, "value", frequency)).strip().lower().replace("_", "-")
    return value or None


def due_dates(start_date: date, end_date: date, frequency) -> list[date]:
    """
    Due dates from ``start_date`` through ``end_date`` inclusive.

    Each date is offset from the start date (not from the previous due date),
    so a 31st start clamps per month without drifting. Annual and unknown
    frequencies yield a single date at the start; the result is never empty.
    """
    step = STEP_MONTHS.get(_normalize_frequency(frequency))
    if step is None:
        return [start_date]

    dates = []
    offset = 0
    current = start_date
    while current <= end_date:
        dates.append(current)
        offset += step
        current = _add_months(start_date, offset)
    return dates or [start_date]


def split_amount(total: Decimal, count: int) -> list[Decimal]:
    """
    Equal installments rounded to the cent, with the remainder on the last one.
    The last installment is never negative.
    """
    total = Decimal(total).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
    installment = (total / count).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)
    if installment * (count - 1) > total:
        installment = (total / count).quantize(MONEY_QUANT, rounding=ROUND_DOWN)
    amounts = [installment] * (count - 1)
    amounts.append(total - installment * (count - 1))
    return amounts


def build_schedule(total_amount: Decimal, start_date: date, end_date: date, frequency) -> list[ScheduledPayment]:
    dates = due_dates(start_date, end_date, frequency)
    amounts = split_amount(Decimal(str(total_amount)), len(dates))
    return [
        ScheduledPayment(sequence=index, due_date=due, amount=amount)
        for index, (due, amount) in enumerate(zip(dates, amounts), start=1)
    ]


@transaction.atomic
def materialize_schedule(lease: Lease, *, memo_suffix: str = "") -> list[Payment]:
    if lease.payments.exists():
        raise PaymentStateError(f"Lease {lease.reference} already has a payment schedule.")

    schedule = build_schedule(lease.rent_amount, lease.start_date, lease.end_date, lease.rent_frequency)
    count = len(schedule)
    payments = Payment.objects.bulk_create(
        [
            Payment(
                lease=lease,
                sequence=item.sequence,
                amount=item.amount,
                due_date=item.due_date,
                is_paid=False,
                status=Payment.Status.PENDING,
                memo=f"Lease payment {item.sequence} of {count}{memo_suffix}",
            )
            for item in schedule
        ]
    )
    logger.info("Created %s payment(s) for lease %s", count, lease.reference)
    return payments
