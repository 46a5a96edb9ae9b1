"""Plain-dict serializers for order page props."""

from megashop.core.utils import storage_url

from .models import OrderTracking


def item_to_dict(item):
    return {
        "id": item.pk,
        "product_id": item.product_id,
        "name": item.name,
        "quantity": item.quantity,
        "price": item.price,
        "subtotal": item.subtotal,
        "image": item.image or None,
        "image_url": storage_url(item.image),
    }


def tracking_to_dict(order):
    try:
        tracking = order.tracking
    except OrderTracking.DoesNotExist:
        return None
    return {
        "id": tracking.pk,
        "tracking_id": tracking.tracking_id,
        "partner_id": tracking.partner_id,
        "status": tracking.status,
        "details": tracking.details,
        "updated_at": tracking.updated_at.isoformat(),
    }


def order_to_dict(order, with_items=True):
    data = {
        "id": order.pk,
        "user_id": str(order.user_id) if order.user_id else None,
        "name": order.name,
        "email": order.email,
        "shipping_address": order.shipping_address,
        "mobile": order.mobile,
        "total": order.total,
        "status": order.status,
        "created_at": order.created_at.isoformat(),
        "updated_at": order.updated_at.isoformat(),
    }
    if with_items:
        data["items"] = [item_to_dict(item) for item in order.items.all()]
        data["tracking"] = tracking_to_dict(order)
    return data
