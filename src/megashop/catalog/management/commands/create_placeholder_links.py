"""Management command to put the placeholder image into uploads storage."""

from django.contrib.staticfiles import finders
from django.core.files import File
from django.core.files.storage import default_storage
from django.core.management.base import BaseCommand, CommandError

from megashop.core.utils import (
    PLACEHOLDER_STATIC_PATH,
    PLACEHOLDER_UPLOAD_PATH,
    forget_placeholder_url,
)


class Command(BaseCommand):
    help = "Copy the bundled placeholder image to uploads/ so stored paths resolve"

    def handle(self, *args, **options):
        source = finders.find(PLACEHOLDER_STATIC_PATH)
        if not source:
            raise CommandError(f"Source file not found: {PLACEHOLDER_STATIC_PATH}")

        if default_storage.exists(PLACEHOLDER_UPLOAD_PATH):
            default_storage.delete(PLACEHOLDER_UPLOAD_PATH)
            self.stdout.write(f"Removed existing file: {PLACEHOLDER_UPLOAD_PATH}")

        with open(source, "rb") as handle:
            saved = default_storage.save(PLACEHOLDER_UPLOAD_PATH, File(handle))
        forget_placeholder_url()
        self.stdout.write(self.style.SUCCESS(f"Placeholder stored at {saved}"))
