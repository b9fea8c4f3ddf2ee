"""Catalog image storage.

Images go through Django's ``default_storage``: local disk in
development, whatever backend ``STORAGES["default"]`` names elsewhere.
"""

import logging
import re
from dataclasses import dataclass

from django.core.files.storage import default_storage
from django.utils import timezone

from shoestop.core.conf import get_setting
from shoestop.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredImage:
    """Reference to an uploaded image."""

    url: str
    name: str


def store_image(upload, folder):
    """Validate and store an uploaded image under ``folder``.

    Raises:
        ValidationError: Not an image, or larger than UPLOAD_MAX_BYTES
    """
    content_type = getattr(upload, "content_type", "") or ""
    if not content_type.startswith("image/"):
        raise ValidationError("Only image uploads are allowed")

    max_bytes = get_setting("UPLOAD_MAX_BYTES")
    if upload.size > max_bytes:
        raise ValidationError(f"Image must be at most {max_bytes // (1024 * 1024)} MB")

    safe_name = _UNSAFE_CHARS.sub("_", upload.name or "image").strip("_") or "image"
    stamp = int(timezone.now().timestamp() * 1000)
    name = default_storage.save(f"{folder}/{stamp}_{safe_name}", upload)

    logger.debug("Stored image %s (%s bytes)", name, upload.size)
    return StoredImage(url=default_storage.url(name), name=name)


def remove_image(name):
    """Delete a stored image; failures are logged, never raised."""
    if not name:
        return
    try:
        default_storage.delete(name)
    except Exception as e:
        logger.warning("Failed to delete image %s: %s", name, e)
    else:
        logger.debug("Removed image %s", name)
