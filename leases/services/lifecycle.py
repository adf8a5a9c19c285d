from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from leases.exceptions import AgreementNotFound
from leases.models import Farmer, Lease, Property
from leases.services.agreements import AgreementFactory, CompletedAgreementInfo, verify_agreement
from leases.services.composer import LeaseCreationData
from leases.services.repository import TemplateRepository
from leases.services.scheduling import materialize_schedule

logger = logging.getLogger(__name__)

RENEWAL_MEMO_SUFFIX = " (Renewed)"


def _attach_agreement(lease: Lease, info: CompletedAgreementInfo) -> None:
    lease.agreement_file_name = info.file_name
    lease.agreement_path = info.file_path
    lease.agreement_hash = info.file_hash
    lease.save(update_fields=["agreement_file_name", "agreement_path", "agreement_hash", "updated_at"])


def _issue_agreement(lease: Lease, template_name: str, factory: AgreementFactory, *, memo_suffix: str = ""):
    """
    Generate the lease document and payment schedule. A document written for
    a lease whose transaction then fails is discarded before re-raising.
    """
    info = factory.create_from_template(template_name, LeaseCreationData.from_lease(lease))
    try:
        _attach_agreement(lease, info)
        materialize_schedule(lease, memo_suffix=memo_suffix)
    except Exception:
        factory.discard(info)
        raise
    return info


def create_lease(
    *,
    property: Property,
    farmer: Farmer,
    template_name: str,
    start_date: date,
    end_date: date,
    rent_amount: Decimal,
    rent_frequency: str,
    lease_type: str = Lease.LeaseType.CASH_RENT,
    growing_year: int | None = None,
    notes: str = "",
    repository: TemplateRepository | None = None,
) -> tuple[Lease, CompletedAgreementInfo]:
    factory = AgreementFactory(repository or TemplateRepository.from_settings())
    with transaction.atomic():
        lease = Lease.objects.create(
            property=property,
            farmer=farmer,
            lease_type=lease_type,
            start_date=start_date,
            end_date=end_date,
            growing_year=growing_year or start_date.year,
            rent_amount=Decimal(str(rent_amount)),
            rent_frequency=rent_frequency,
            status=Lease.Status.ACTIVE,
            notes=notes,
        )
        info = _issue_agreement(lease, template_name, factory)

    logger.info("Created lease %s with agreement %s", lease.reference, info.file_name)
    return lease, info


def renew_lease(
    lease: Lease,
    *,
    start_date: date,
    end_date: date,
    rent_amount: Decimal | None = None,
    rent_frequency: str | None = None,
    template_name: str | None = None,
    notes: str | None = None,
    repository: TemplateRepository | None = None,
) -> tuple[Lease, CompletedAgreementInfo | None]:
    info = None
    with transaction.atomic():
        renewal = Lease.objects.create(
            property=lease.property,
            farmer=lease.farmer,
            lease_type=lease.lease_type,
            start_date=start_date,
            end_date=end_date,
            growing_year=start_date.year,
            rent_amount=Decimal(str(rent_amount)) if rent_amount is not None else lease.rent_amount,
            rent_frequency=rent_frequency or lease.rent_frequency,
            status=Lease.Status.ACTIVE,
            renewed_from=lease,
            notes=notes if notes is not None else f"Renewed from {lease.start_date:%Y} lease",
        )
        if template_name:
            factory = AgreementFactory(repository or TemplateRepository.from_settings())
            info = _issue_agreement(renewal, template_name, factory, memo_suffix=RENEWAL_MEMO_SUFFIX)
        else:
            materialize_schedule(renewal, memo_suffix=RENEWAL_MEMO_SUFFIX)

    logger.info("Renewed lease %s as %s", lease.reference, renewal.reference)
    return renewal, info


def void_lease(lease: Lease) -> Lease:
    if lease.status != Lease.Status.VOID:
        lease.status = Lease.Status.VOID
        lease.save(update_fields=["status", "updated_at"])
        logger.info("Voided lease %s", lease.reference)
    return lease


def expire_leases(today: date | None = None) -> int:
    today = today or timezone.localdate()
    count = Lease.objects.filter(status=Lease.Status.ACTIVE, end_date__lt=today).update(status=Lease.Status.EXPIRED)
    if count:
        logger.info("Expired %s lease(s) ending before %s", count, today.isoformat())
    return count


def verify_lease_agreement(lease: Lease, repository: TemplateRepository | None = None) -> str:
    if not lease.agreement_file_name:
        raise AgreementNotFound(str(lease.reference))
    repository = repository or TemplateRepository.from_settings()
    return verify_agreement(repository, lease.agreement_file_name, lease.agreement_hash)
