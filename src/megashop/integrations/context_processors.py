"""Context processors for analytics tags."""

from .analytics import ga_config, pixel_config


def tracking_context(request):
    """Expose the tracking ids of enabled integrations to the page shell."""
    ga = ga_config()
    pixel = pixel_config()
    return {
        "ga_measurement_id": ga["measurement_id"] if ga["enabled"] else "",
        "fb_pixel_id": pixel["pixel_id"] if pixel["enabled"] else "",
    }
