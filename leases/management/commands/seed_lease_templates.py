from django.core.management.base import BaseCommand

from leases.services.repository import TemplateRepository, Tier
from leases.services.seeding import seed_templates_if_needed


class Command(BaseCommand):
    help = "Write the stock agricultural lease templates into the Templates tier when it is empty."

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Rewrite the stock templates even if the tier already holds templates.",
        )

    def handle(self, *args, **options):
        repository = TemplateRepository.from_settings()
        written = seed_templates_if_needed(repository, force=options["force"])
        if not written:
            existing = repository.list_names(Tier.TEMPLATES)
            self.stdout.write(f"Templates tier already holds {len(existing)} template(s); nothing seeded.")
            return
        for name in written:
            self.stdout.write(f"  {name}")
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(written)} lease template(s)."))
