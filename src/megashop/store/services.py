"""Order services.

Checkout, status and tracking updates. Checkout runs in one transaction
and locks the ordered products so concurrent orders cannot take the same
unit of stock twice.
"""

import logging
from collections import OrderedDict
from decimal import Decimal

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import transaction
from django.db.models import F
from django.template.loader import render_to_string

from megashop.catalog.models import Product
from megashop.integrations.analytics import facebook_pixel

from .exceptions import InsufficientStockError, ProductUnavailableError
from .models import Order, OrderItem, OrderStatus, OrderTracking

logger = logging.getLogger(__name__)


def _requested_quantities(items):
    """Sum quantities per product id, keeping first-seen order."""
    quantities = OrderedDict()
    for item in items:
        product_id = int(item["id"])
        quantities[product_id] = quantities.get(product_id, 0) + int(item["quantity"])
    return quantities


@transaction.atomic
def place_order(data, user=None):
    """Place an order and take its items out of stock.

    Args:
        data: Cleaned checkout data (name, email, shipping_address,
            mobile and items as ``[{"id": ..., "quantity": ...}]``)
        user: The signed-in user, or None for a guest checkout

    Returns:
        The created Order

    Raises:
        ProductUnavailableError: If an ordered product no longer exists
        InsufficientStockError: If a product lacks stock; nothing is saved
    """
    quantities = _requested_quantities(data["items"])

    products = {
        product.pk: product
        for product in Product.objects.select_for_update().filter(pk__in=list(quantities)).order_by("pk")
    }

    total = Decimal("0")
    lines = []
    for product_id, quantity in quantities.items():
        product = products.get(product_id)
        if product is None:
            raise ProductUnavailableError(f"Product {product_id} is no longer available.")
        if product.stock < quantity:
            raise InsufficientStockError(product, quantity)

        updated = Product.objects.filter(pk=product_id, stock__gte=quantity).update(
            stock=F("stock") - quantity
        )
        if not updated:
            product.refresh_from_db(fields=["stock"])
            raise InsufficientStockError(product, quantity)

        total += product.price * quantity
        lines.append((product, quantity))

    order = Order.objects.create(
        user=user if user is not None and user.is_authenticated else None,
        name=data["name"],
        email=data.get("email") or "",
        shipping_address=data["shipping_address"],
        mobile=data["mobile"],
        total=total,
        status=OrderStatus.PENDING,
    )
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            product=product,
            name=product.name,
            quantity=quantity,
            price=product.price,
            image=product.main_image_path,
        )
        for product, quantity in lines
    ])
    OrderTracking.objects.create(order=order, status=OrderStatus.PENDING)

    logger.info(
        "Order placed",
        extra={"order_id": order.pk, "total": str(total), "items": len(lines)},
    )
    transaction.on_commit(lambda: notify_order_placed(order.pk))
    return order


def send_order_email(order):
    """Email the new order to the shop's order address, if one is set."""
    recipient = settings.ADMIN_ORDER_EMAIL
    if not recipient:
        return False

    context = {
        "order": order,
        "items": list(order.items.all()),
        "store_name": settings.STORE_NAME,
        "currency": settings.STORE_CURRENCY,
    }
    message = EmailMultiAlternatives(
        subject=f"New Order #{order.pk} - {settings.STORE_NAME}",
        body=render_to_string("emails/order_confirmation.txt", context),
        to=[recipient],
    )
    message.attach_alternative(render_to_string("emails/order_confirmation.html", context), "text/html")
    message.send()
    return True


def track_purchase(order):
    """Post the Purchase conversion event for ``order``."""
    return facebook_pixel().post_event(
        "Purchase",
        {
            "currency": settings.STORE_CURRENCY,
            "value": float(order.total),
            "content_type": "product",
            "content_ids": [str(item.product_id) for item in order.items.all() if item.product_id],
            "order_id": str(order.pk),
        },
    )


def notify_order_placed(order_id):
    """Post-commit side effects of a checkout. Failures are logged, not raised."""
    order = Order.objects.filter(pk=order_id).first()
    if order is None:
        return

    try:
        send_order_email(order)
    except Exception:
        logger.exception("Failed to send order confirmation email", extra={"order_id": order_id})

    try:
        result = track_purchase(order)
        if result.get("status") != "success":
            logger.debug("Purchase event not tracked", extra={"order_id": order_id, "result": result})
    except Exception:
        logger.exception("Failed to track Facebook Pixel purchase event", extra={"order_id": order_id})


@transaction.atomic
def update_status(order, status):
    """Set the order status, mirroring it onto the tracking record."""
    order.status = status
    order.save(update_fields=["status", "updated_at"])
    OrderTracking.objects.filter(order=order).update(status=status)
    logger.info("Order status updated", extra={"order_id": order.pk, "status": status})
    return order


@transaction.atomic
def update_tracking(order, data):
    """Create or update the tracking record; the order takes its status."""
    tracking, _ = OrderTracking.objects.get_or_create(order=order)
    tracking.tracking_id = data.get("tracking_id") or ""
    tracking.partner_id = data.get("partner_id") or ""
    tracking.status = data["status"]
    if data.get("details_sent"):
        tracking.details = data.get("details")
    tracking.save()

    order.status = data["status"]
    order.save(update_fields=["status", "updated_at"])
    logger.info(
        "Order tracking updated",
        extra={"order_id": order.pk, "tracking_id": tracking.tracking_id, "status": tracking.status},
    )
    return tracking
