"""Plain-dict serializers for homepage page props."""

from megashop.catalog.serializers import product_to_dict
from megashop.core.utils import storage_url

from .services import decode_additional_data


def section_to_dict(section):
    return {
        "id": section.pk,
        "section_name": section.section_name,
        "title": section.title,
        "subtitle": section.subtitle,
        "content": section.content,
        "image_path": section.image_path or None,
        "image_url": storage_url(section.image_path),
        "button_text": section.button_text,
        "button_url": section.button_url,
        "is_active": section.is_active,
        "sort_order": section.sort_order,
        "additional_data": decode_additional_data(section),
    }


def featured_to_dict(featured):
    return {
        "id": featured.pk,
        "product_id": featured.product_id,
        "is_active": featured.is_active,
        "sort_order": featured.sort_order,
        "product": product_to_dict(featured.product),
    }
