"""File manager over the ``uploads/`` directory of default storage."""

import logging
import posixpath
import time

from django.core.files.storage import default_storage
from django.utils.crypto import get_random_string

from megashop.core.uploads import file_extension

from .exceptions import InvalidPathError, StoredFileNotFoundError

logger = logging.getLogger(__name__)

UPLOADS_DIR = "uploads"
MAX_FILE_SIZE = 10 * 1024 * 1024


def file_info(path, request=None):
    """Describe a stored file for the file manager page."""
    url = default_storage.url(path)
    if request is not None and url.startswith("/"):
        url = request.build_absolute_uri(url)
    return {
        "id": get_random_string(16),
        "name": posixpath.basename(path),
        "path": path,
        "url": url,
        "size": default_storage.size(path),
        "last_modified": int(default_storage.get_modified_time(path).timestamp()),
        "extension": file_extension(path),
    }


def list_files(request=None):
    """Files directly under ``uploads/``, newest first."""
    if not default_storage.exists(UPLOADS_DIR):
        return []
    _, names = default_storage.listdir(UPLOADS_DIR)
    files = [file_info(f"{UPLOADS_DIR}/{name}", request) for name in names]
    return sorted(files, key=lambda f: f["last_modified"], reverse=True)


def upload_name(original_name):
    """``<unix time>-<8 random chars>.<ext>``"""
    name = f"{int(time.time())}-{get_random_string(8)}"
    extension = posixpath.splitext(original_name)[1].lstrip(".")
    return f"{name}.{extension}" if extension else name


def save_file(upload):
    """Store an upload under ``uploads/`` and return the saved path."""
    path = default_storage.save(f"{UPLOADS_DIR}/{upload_name(upload.name)}", upload)
    logger.info("File uploaded", extra={"path": path, "size": upload.size})
    return path


def clean_path(path):
    """Normalize ``path`` and make sure it stays inside ``uploads/``.

    Raises:
        InvalidPathError: If the path escapes the uploads directory
    """
    normalized = posixpath.normpath((path or "").strip().lstrip("/"))
    if not normalized.startswith(f"{UPLOADS_DIR}/"):
        raise InvalidPathError("Files can only be deleted from the uploads directory.")
    return normalized


def delete_file(path):
    """Delete a file under ``uploads/``.

    Raises:
        InvalidPathError: If the path escapes the uploads directory
        StoredFileNotFoundError: If there is no file at the path
    """
    path = clean_path(path)
    if not default_storage.exists(path):
        raise StoredFileNotFoundError("File not found")
    default_storage.delete(path)
    logger.info("File deleted", extra={"path": path})
