"""Management command to import products from a CSV file."""

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from megashop.catalog.csv_io import import_products
from megashop.catalog.exceptions import CsvImportError
from megashop.catalog.models import Product


class Command(BaseCommand):
    help = "Import products from a CSV file (ID, Name, Price, Description, Category, ...)"

    def add_arguments(self, parser):
        parser.add_argument("csv_path", help="Path to the products CSV file")
        parser.add_argument(
            "--truncate",
            action="store_true",
            help="Delete all existing products before importing",
        )

    def handle(self, *args, **options):
        path = Path(options["csv_path"])
        if not path.exists():
            raise CommandError(f"CSV file not found: {path}")

        if options["truncate"]:
            deleted, _ = Product.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} existing rows"))

        try:
            stats = import_products(path.read_bytes())
        except CsvImportError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(self.style.SUCCESS("\nImport complete!"))
        self.stdout.write(f"  Rows: {stats['total']}")
        self.stdout.write(f"  Created: {stats['created']}")
        self.stdout.write(f"  Updated: {stats['updated']}")
        if stats["errors"]:
            self.stdout.write(self.style.WARNING(f"  Errors: {stats['errors']}"))
