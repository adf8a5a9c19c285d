from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from django.utils.dateparse import parse_date

from leases.services.lifecycle import expire_leases


class Command(BaseCommand):
    help = "Mark active leases whose end date has passed as expired."

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            help="Reference date (YYYY-MM-DD). Defaults to today.",
        )

    def handle(self, *args, **options):
        raw = options.get("date")
        if raw:
            try:
                today = parse_date(raw)
            except ValueError:
                today = None
            if today is None:
                raise CommandError(f"Invalid date '{raw}'; expected YYYY-MM-DD.")
        else:
            today = timezone.localdate()

        count = expire_leases(today)
        self.stdout.write(self.style.SUCCESS(f"Expired {count} lease(s) ending before {today.isoformat()}."))
