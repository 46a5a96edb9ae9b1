"""Small helpers shared by the apps."""

from django.core.cache import cache
from django.core.files.storage import default_storage
from django.templatetags.static import static

PLACEHOLDER_STATIC_PATH = "images/placeholder.svg"
PLACEHOLDER_UPLOAD_PATH = "uploads/placeholder.svg"
PLACEHOLDER_CACHE_KEY = "placeholder_image_url"
PLACEHOLDER_CACHE_TIMEOUT = 300


def placeholder_image_url():
    """URL of the placeholder product image.

    Prefers the copy in uploads storage (see ``create_placeholder_links``),
    falling back to the bundled static file. The answer is cached so
    listings do not hit storage once per product.
    """
    return cache.get_or_set(PLACEHOLDER_CACHE_KEY, _resolve_placeholder_url, PLACEHOLDER_CACHE_TIMEOUT)


def _resolve_placeholder_url():
    if default_storage.exists(PLACEHOLDER_UPLOAD_PATH):
        return default_storage.url(PLACEHOLDER_UPLOAD_PATH)
    return static(PLACEHOLDER_STATIC_PATH)


def forget_placeholder_url():
    cache.delete(PLACEHOLDER_CACHE_KEY)


def storage_url(path):
    """Public URL for a stored file path, or None."""
    if not path:
        return None
    if path.startswith(("http://", "https://", "/")):
        return path
    return default_storage.url(path)


def delete_stored_file(path):
    """Delete a stored file if it exists. Returns True when something was removed."""
    if path and default_storage.exists(path):
        default_storage.delete(path)
        return True
    return False
