"""
Image storage capability used by the product listing views.

Views only see ``upload(content, filename) -> {"url", "public_id"}`` and
``delete(public_id)``; which backend sits behind them is chosen by the
``IMAGE_STORE`` key of ``settings.CAMPUSMART``.
"""
import logging
import os
import uuid

from django.core.files.base import ContentFile, File
from django.core.files.storage import default_storage
from django.utils.module_loading import import_string

from campusmart.conf import app_setting

logger = logging.getLogger(__name__)


class DefaultStorageImageStore:
    """Stores product images through Django's configured default storage."""

    folder = "campusmart/products"

    def __init__(self, storage=None, folder=None):
        self.storage = storage or default_storage
        if folder:
            self.folder = folder

    def upload(self, content, filename=None):
        if isinstance(content, (bytes, bytearray)):
            content = ContentFile(bytes(content))
        elif not isinstance(content, File):
            content = File(content)

        ext = os.path.splitext(filename or getattr(content, "name", "") or "")[1].lower() or ".jpg"
        name = self.storage.save(f"{self.folder}/{uuid.uuid4().hex}{ext}", content)
        logger.debug("Stored product image %s", name)
        return {"url": self.storage.url(name), "public_id": name}

    def delete(self, public_id):
        self.storage.delete(public_id)


def get_image_store():
    return import_string(app_setting("IMAGE_STORE"))()


def upload_images(files, store=None):
    store = store or get_image_store()
    return [store.upload(f, getattr(f, "name", None)) for f in files]


def delete_images(images, store=None):
    """Delete every stored image of a product; failures are logged, not raised."""
    store = store or get_image_store()
    for image in images:
        public_id = image.get("public_id")
        if not public_id:
            continue
        try:
            store.delete(public_id)
        except Exception:
            logger.exception("Image deletion failed for %s", public_id)
