"""Tests for catalog image storage."""

from unittest.mock import patch

import pytest
from django.core.files.storage import default_storage

from shoestop.catalog.uploads import remove_image, store_image
from shoestop.conftest import make_image
from shoestop.core.exceptions import ValidationError


class TestStoreImage:
    def test_stores_under_folder(self):
        image = store_image(make_image(name="my shoe (1).png"), "products")

        assert image.name.startswith("products/")
        assert image.name.endswith("my_shoe_1_.png")
        assert image.url.startswith("/uploads/products/")
        assert default_storage.exists(image.name)

    def test_rejects_non_image(self):
        upload = make_image(name="a.pdf", content_type="application/pdf", content=b"%PDF")

        with pytest.raises(ValidationError):
            store_image(upload, "products")

    def test_rejects_large_file(self, settings):
        settings.SHOP = {"UPLOAD_MAX_BYTES": 10}

        with pytest.raises(ValidationError, match="at most"):
            store_image(make_image(), "products")


class TestRemoveImage:
    def test_removes(self):
        image = store_image(make_image(), "trending")

        remove_image(image.name)

        assert not default_storage.exists(image.name)

    def test_storage_failure_is_logged(self):
        with patch("shoestop.catalog.uploads.default_storage") as storage, \
                patch("shoestop.catalog.uploads.logger") as logger:
            storage.delete.side_effect = OSError("read-only")
            remove_image("products/x.png")

        logger.warning.assert_called_once()

    def test_blank_name_is_noop(self):
        remove_image("")
