"""Homepage services."""

import json
import logging

from django.db import transaction
from django.db.models import Max

from megashop.core.uploads import store_upload
from megashop.core.utils import delete_stored_file

from .exceptions import AlreadyFeaturedError
from .models import FeaturedProduct

logger = logging.getLogger(__name__)

SECTION_IMAGE_DIR = "uploads/homepage"


def decode_additional_data(section):
    """Return ``additional_data`` decoded when it was stored as JSON text."""
    data = section.additional_data
    if not isinstance(data, str):
        return data
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        logger.error(
            "Failed to decode section additional data",
            extra={"section": section.section_name, "error": str(e)},
        )
        return data


def default_product_id(section):
    """The order form's preselected product, if configured."""
    if section is None:
        return None
    data = decode_additional_data(section)
    if isinstance(data, dict):
        return data.get("default_product_id")
    return None


@transaction.atomic
def update_section(section, values, image=None):
    """Apply changed values (and an optional new image) to a section."""
    for field, value in values.items():
        setattr(section, field, value)

    if image:
        delete_stored_file(section.image_path)
        section.image_path = store_upload(image, SECTION_IMAGE_DIR)

    section.save()
    logger.info(
        "Homepage section updated",
        extra={"section_id": section.pk, "section": section.section_name, "fields": sorted(values)},
    )
    return section


@transaction.atomic
def add_featured_product(product, sort_order=None):
    """Feature ``product``; without a sort order it goes last.

    Raises:
        AlreadyFeaturedError: If the product is already featured
    """
    if FeaturedProduct.objects.filter(product=product).exists():
        raise AlreadyFeaturedError("Product is already featured.")

    if sort_order is None:
        current = FeaturedProduct.objects.aggregate(top=Max("sort_order"))["top"]
        sort_order = (current or 0) + 1

    return FeaturedProduct.objects.create(product=product, sort_order=sort_order, is_active=True)


@transaction.atomic
def reorder_featured_products(entries):
    for entry in entries:
        FeaturedProduct.objects.filter(pk=entry["id"]).update(sort_order=entry["sort_order"])


def toggle_featured_product(featured):
    featured.is_active = not featured.is_active
    featured.save(update_fields=["is_active", "updated_at"])
    return featured
