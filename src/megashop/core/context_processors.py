"""Context processors for MegaShop core."""

from django.conf import settings


def store_context(request):
    """Add store branding to templates."""
    return {
        "store_name": settings.STORE_NAME,
        "store_currency": settings.STORE_CURRENCY,
    }
