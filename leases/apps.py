import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LeasesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "leases"
    verbose_name = "Leases"

    def ready(self):
        if not getattr(settings, "LEASE_SEED_TEMPLATES_ON_STARTUP", False):
            return
        from leases.exceptions import LeaseError
        from leases.services.repository import TemplateRepository
        from leases.services.seeding import seed_templates_if_needed

        try:
            seed_templates_if_needed(TemplateRepository.from_settings())
        except LeaseError:
            logger.exception("Lease template seeding failed at startup")
