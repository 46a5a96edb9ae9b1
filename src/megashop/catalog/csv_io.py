"""Product CSV export and import."""

import csv
import io
import logging
from decimal import Decimal, InvalidOperation

from django.db import DatabaseError, transaction

from .exceptions import CsvImportError, CsvRowError
from .models import Category, Product

logger = logging.getLogger(__name__)

PRODUCT_CSV_COLUMNS = [
    "ID",
    "Name",
    "Price",
    "Description",
    "Category",
    "Category ID",
    "Stock",
    "Meta Description",
    "Meta Title",
    "Main Image",
]
REQUIRED_COLUMNS = ("Name", "Price")


def product_row(product):
    return [
        product.pk,
        product.name,
        product.price,
        product.description,
        product.category_name,
        product.category_id or "",
        product.stock,
        product.meta_description,
        product.meta_title,
        product.main_image_path,
    ]


def export_products(stream):
    """Write every product to ``stream`` as CSV. Returns the row count."""
    writer = csv.writer(stream)
    writer.writerow(PRODUCT_CSV_COLUMNS)
    count = 0
    for product in Product.objects.order_by("pk"):
        writer.writerow(product_row(product))
        count += 1
    return count


def read_rows(source):
    """Return a DictReader over ``source`` (text, bytes or a file object)."""
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CsvImportError("The CSV file must be UTF-8 encoded.") from exc

    reader = csv.DictReader(io.StringIO(source))
    header = [name.strip() for name in (reader.fieldnames or [])]
    if not header:
        raise CsvImportError("The CSV file is empty.")
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise CsvImportError(f"Missing required columns: {', '.join(missing)}")
    reader.fieldnames = header
    return reader


def _cell(row, column):
    return (row.get(column) or "").strip()


def _resolve_category(row):
    category_id = _cell(row, "Category ID")
    if category_id.isdigit():
        category = Category.objects.filter(pk=int(category_id)).first()
        if category is not None:
            return category

    name = _cell(row, "Category")
    if not name:
        return None
    category = Category.objects.filter(name=name).first()
    if category is None:
        category = Category.objects.create(name=name)
        logger.info("Category created from CSV", extra={"category_id": category.pk, "category_name": name})
    return category


def import_row(row):
    """Create or update one product from a CSV row. Returns True if created.

    Raises:
        CsvRowError: If Name or Price is missing or a number is malformed
    """
    name = _cell(row, "Name")
    price = _cell(row, "Price")
    if not name or not price:
        raise CsvRowError("Name and Price are required.")

    try:
        price = Decimal(price)
        stock = int(_cell(row, "Stock") or 0)
    except (InvalidOperation, ValueError) as exc:
        raise CsvRowError(f"Invalid number: {exc}") from exc
    if price < 0 or stock < 0:
        raise CsvRowError("Price and Stock must not be negative.")

    category = _resolve_category(row)
    values = {
        "name": name,
        "price": price,
        "description": _cell(row, "Description"),
        "category": category,
        "category_name": category.name if category else _cell(row, "Category"),
        "stock": stock,
        "meta_description": _cell(row, "Meta Description"),
        "meta_title": _cell(row, "Meta Title"),
        "main_image": _cell(row, "Main Image"),
    }

    product_id = _cell(row, "ID")
    product = Product.objects.filter(pk=int(product_id)).first() if product_id.isdigit() else None
    if product is None:
        Product.objects.create(**values)
        return True

    for field, value in values.items():
        setattr(product, field, value)
    product.save()
    return False


@transaction.atomic
def import_products(source):
    """Import products from CSV.

    Rows whose ``ID`` matches an existing product update it; all other
    rows create a product. Each row runs in its own savepoint so a bad
    row is counted and skipped without undoing the others.

    Returns:
        dict with ``total``, ``created``, ``updated`` and ``errors`` counts

    Raises:
        CsvImportError: If the file is empty, unreadable or lacks columns
    """
    stats = {"total": 0, "created": 0, "updated": 0, "errors": 0}

    for line, row in enumerate(read_rows(source), start=2):
        stats["total"] += 1
        try:
            with transaction.atomic():
                created = import_row(row)
        except (CsvRowError, DatabaseError) as exc:
            stats["errors"] += 1
            logger.warning("Skipping CSV row", extra={"line": line, "error": str(exc)})
            continue
        stats["created" if created else "updated"] += 1

    logger.info("Product CSV imported", extra={"stats": stats})
    return stats
