"""Management command to copy images referenced by a products CSV into storage."""

import csv
from pathlib import Path

from django.core.files import File
from django.core.files.storage import default_storage
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Copy product images named in the CSV 'Main Image' column into uploads/"

    def add_arguments(self, parser):
        parser.add_argument("csv_path", help="Path to the products CSV file")
        parser.add_argument(
            "--source-dir",
            default=".",
            help="Directory the CSV image paths are relative to",
        )

    def handle(self, *args, **options):
        csv_path = Path(options["csv_path"])
        source_dir = Path(options["source_dir"])
        if not csv_path.exists():
            raise CommandError(f"CSV file not found: {csv_path}")

        self.stdout.write("Copying product images...")
        copied = failed = 0

        with csv_path.open(newline="", encoding="utf-8-sig") as handle:
            for row in csv.DictReader(handle):
                image_path = (row.get("Main Image") or "").strip()
                if not image_path:
                    continue

                source = source_dir / image_path.lstrip("/")
                if not source.is_file():
                    self.stdout.write(self.style.WARNING(f"  Source file not found: {source}"))
                    failed += 1
                    continue

                target = f"uploads/{source.name}"
                if default_storage.exists(target):
                    default_storage.delete(target)
                with source.open("rb") as image:
                    default_storage.save(target, File(image, name=source.name))
                self.stdout.write(f"  Copied: {source.name}")
                copied += 1

        self.stdout.write(self.style.SUCCESS(f"\nDone! Copied {copied} images, failed {failed}."))
