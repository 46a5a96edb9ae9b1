"""Validation and storage of uploaded images."""

import logging
import os

from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.utils.crypto import get_random_string

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ("jpeg", "png", "jpg", "gif", "webp", "avif")
MAX_IMAGE_SIZE = 2 * 1024 * 1024


def file_extension(name):
    return os.path.splitext(name)[1].lstrip(".").lower()


def validate_image_upload(upload):
    """Raise ValidationError unless ``upload`` is an allowed image of at most 2 MB."""
    if file_extension(upload.name) not in IMAGE_EXTENSIONS:
        raise ValidationError(
            "The file must be an image of type: %s." % ", ".join(IMAGE_EXTENSIONS)
        )
    if upload.size > MAX_IMAGE_SIZE:
        raise ValidationError("The image may not be greater than 2048 kilobytes.")


def store_upload(upload, directory="uploads"):
    """Save ``upload`` under ``directory`` with a random name and return the stored path."""
    extension = file_extension(upload.name)
    name = get_random_string(40)
    if extension:
        name = f"{name}.{extension}"
    path = default_storage.save(f"{directory}/{name}", upload)
    logger.debug("Stored upload", extra={"path": path, "size": upload.size})
    return path


def image_upload_errors(uploads, field="images"):
    """Validate several uploads; return ``{field: message}`` for the first bad one."""
    for upload in uploads:
        try:
            validate_image_upload(upload)
        except ValidationError as exc:
            return {field: exc.messages[0]}
    return {}
