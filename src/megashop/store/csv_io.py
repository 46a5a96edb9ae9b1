"""Order CSV export and import (one row per order item)."""

import csv
import io
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from django.core.management.color import no_style
from django.db import DatabaseError, connection, transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from megashop.catalog.models import Product

from .exceptions import OrderImportError
from .models import Order, OrderItem, OrderStatus, OrderTracking

logger = logging.getLogger(__name__)

ORDER_CSV_COLUMNS = [
    "Order ID",
    "Date",
    "Customer Name",
    "Email",
    "Mobile",
    "Shipping Address",
    "Total",
    "Status",
    "Product ID",
    "Product Name",
    "Quantity",
    "Price",
    "Tracking ID",
    "Partner ID",
]


def filtered_orders(status=None, start_date=None, end_date=None):
    orders = Order.objects.select_related("tracking").prefetch_related("items").order_by("-created_at")
    if status and status != "all":
        orders = orders.filter(status=status)
    if start_date:
        orders = orders.filter(created_at__date__gte=start_date)
    if end_date:
        orders = orders.filter(created_at__date__lte=end_date)
    return orders


def _tracking(order):
    try:
        return order.tracking
    except OrderTracking.DoesNotExist:
        return None


def export_orders(stream, orders):
    """Write ``orders`` to ``stream``, one row per item. Returns the row count."""
    writer = csv.writer(stream)
    writer.writerow(ORDER_CSV_COLUMNS)
    rows = 0
    for order in orders:
        tracking = _tracking(order)
        created = timezone.localtime(order.created_at).strftime("%Y-%m-%d %H:%M:%S")
        for item in order.items.all():
            writer.writerow([
                order.pk,
                created,
                order.name,
                order.email,
                order.mobile,
                order.shipping_address,
                order.total,
                order.status,
                item.product_id or "",
                item.name,
                item.quantity,
                item.price,
                tracking.tracking_id if tracking else "",
                tracking.partner_id if tracking else "",
            ])
            rows += 1
    return rows


def _parse_created(value):
    value = (value or "").strip()
    parsed = parse_datetime(value)
    if parsed is None:
        day = parse_date(value)
        if day is None:
            return None
        parsed = datetime(day.year, day.month, day.day)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _product_id(row):
    value = (row.get("Product ID") or "").strip()
    return int(value) if value.isdigit() else None


def group_orders(reader):
    """Yield ``(order_row, item_rows)`` for runs of rows sharing an Order ID."""
    current_id = None
    order_row = None
    items = []
    for row in reader:
        order_id = (row.get("Order ID") or "").strip()
        if order_id != current_id:
            if order_row is not None:
                yield order_row, items
            current_id = order_id
            order_row = row
            items = []
        items.append(row)
    if order_row is not None:
        yield order_row, items


def save_imported_order(order_row, item_rows, skip_existing):
    """Save one grouped order. Returns "created" or "skipped".

    Raises:
        ValueError: If a number, date or status in the rows is malformed
    """
    order_id = int(order_row["Order ID"])
    existing = Order.objects.filter(pk=order_id).first()
    if existing is not None and skip_existing:
        return "skipped"

    status = (order_row.get("Status") or OrderStatus.PENDING).strip()
    if status not in OrderStatus.values:
        raise ValueError(f"Unknown status {status!r}")

    order, _ = Order.objects.update_or_create(
        pk=order_id,
        defaults={
            "name": (order_row.get("Customer Name") or "").strip(),
            "email": (order_row.get("Email") or "").strip(),
            "mobile": (order_row.get("Mobile") or "").strip(),
            "shipping_address": (order_row.get("Shipping Address") or "").strip(),
            "total": Decimal(order_row.get("Total") or "0"),
            "status": status,
        },
    )
    created_at = _parse_created(order_row.get("Date"))
    if created_at is not None:
        Order.objects.filter(pk=order.pk).update(created_at=created_at)

    OrderTracking.objects.update_or_create(
        order=order,
        defaults={
            "tracking_id": (order_row.get("Tracking ID") or "").strip(),
            "partner_id": (order_row.get("Partner ID") or "").strip(),
            "status": status,
        },
    )

    if existing is not None:
        order.items.all().delete()

    product_ids = [_product_id(row) for row in item_rows]
    known = set(Product.objects.filter(pk__in=[pk for pk in product_ids if pk]).values_list("pk", flat=True))
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            product_id=product_id if product_id in known else None,
            name=(row.get("Product Name") or "").strip(),
            quantity=int(row.get("Quantity") or 0),
            price=Decimal(row.get("Price") or "0"),
        )
        for row, product_id in zip(item_rows, product_ids)
    ])
    return "created"


def _reset_order_sequences():
    statements = connection.ops.sequence_reset_sql(no_style(), [Order, OrderItem, OrderTracking])
    if statements:
        with connection.cursor() as cursor:
            for sql in statements:
                cursor.execute(sql)


@transaction.atomic
def import_orders(source, skip_existing=True):
    """Import orders exported by ``export_orders``.

    Consecutive rows with the same Order ID form one order. Existing orders
    are skipped, or replaced when ``skip_existing`` is false. A failing
    order is counted and rolled back alone.

    Returns:
        dict with ``total`` (rows), ``created``, ``skipped`` and ``errors``

    Raises:
        OrderImportError: If the file has no data rows or lacks columns
    """
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes):
        source = source.decode("utf-8-sig", errors="replace")

    reader = csv.DictReader(io.StringIO(source))
    rows = list(reader)
    if not rows:
        raise OrderImportError("The CSV file is empty. Please upload a valid file with order data.")
    if "Order ID" not in (reader.fieldnames or []):
        raise OrderImportError("The CSV file is missing the Order ID column.")

    stats = {"total": len(rows), "created": 0, "skipped": 0, "errors": 0}
    for order_row, item_rows in group_orders(rows):
        try:
            with transaction.atomic():
                outcome = save_imported_order(order_row, item_rows, skip_existing)
        except (ValueError, KeyError, InvalidOperation, DatabaseError) as exc:
            stats["errors"] += 1
            logger.error(
                "Failed to import order",
                extra={"order_id": order_row.get("Order ID"), "error": str(exc)},
            )
            continue
        stats[outcome] += 1

    _reset_order_sequences()
    logger.info("Orders CSV imported", extra={"stats": stats})
    return stats
