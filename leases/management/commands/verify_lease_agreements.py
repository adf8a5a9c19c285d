from django.core.management.base import BaseCommand, CommandError

from leases.exceptions import AgreementIntegrityError, AgreementNotFound
from leases.models import Lease
from leases.services.lifecycle import verify_lease_agreement
from leases.services.repository import TemplateRepository


class Command(BaseCommand):
    help = "Re-hash every stored lease agreement and report any that no longer match their audit hash."

    def handle(self, *args, **options):
        repository = TemplateRepository.from_settings()
        checked = 0
        failures = []
        for lease in Lease.objects.exclude(agreement_file_name="").order_by("id"):
            checked += 1
            try:
                verify_lease_agreement(lease, repository)
            except (AgreementIntegrityError, AgreementNotFound) as exc:
                failures.append(lease)
                self.stdout.write(self.style.ERROR(f"[lease {lease.pk}] {exc}"))

        if failures:
            raise CommandError(f"{len(failures)} of {checked} agreement(s) failed verification.")
        self.stdout.write(self.style.SUCCESS(f"Verified {checked} agreement(s)."))
