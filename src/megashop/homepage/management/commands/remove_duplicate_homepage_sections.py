"""Management command to collapse duplicated homepage sections."""

from django.core.management.base import BaseCommand
from django.db.models import Count, Min

from megashop.homepage.models import HomepageSection


class Command(BaseCommand):
    help = "Remove duplicate homepage sections, keeping the oldest row per section name"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be deleted without deleting anything",
        )

    def handle(self, *args, **options):
        duplicates = (
            HomepageSection.objects.values("section_name")
            .annotate(rows=Count("id"), keep_id=Min("id"))
            .filter(rows__gt=1)
            .order_by("section_name")
        )

        if not duplicates:
            self.stdout.write(self.style.SUCCESS("No duplicate sections found."))
            return

        removed = 0
        for group in duplicates:
            extra = HomepageSection.objects.filter(
                section_name=group["section_name"],
            ).exclude(pk=group["keep_id"])
            count = extra.count()
            self.stdout.write(
                f"  {group['section_name']}: keeping #{group['keep_id']}, "
                f"{count} duplicate(s)"
            )
            if not options["dry_run"]:
                extra.delete()
            removed += count

        if options["dry_run"]:
            self.stdout.write(self.style.WARNING(f"\nDry run: {removed} section(s) would be removed."))
        else:
            self.stdout.write(self.style.SUCCESS(f"\nRemoved {removed} duplicate section(s)."))
