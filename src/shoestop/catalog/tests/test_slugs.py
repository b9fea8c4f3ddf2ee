"""Tests for slug and form-value helpers."""

import pytest

from shoestop.catalog.models import Product
from shoestop.catalog.slugs import parse_bool, parse_sizes, unique_slug


@pytest.mark.django_db
class TestUniqueSlug:
    def test_plain(self):
        assert unique_slug(Product, "Air Max 90") == "air-max-90"

    def test_suffix_when_taken(self, product):
        assert unique_slug(Product, "Air Runner") == "air-runner-2"

    def test_keeps_own_slug(self, product):
        assert unique_slug(Product, "Air Runner", exclude_pk=product.pk) == "air-runner"

    def test_fallback_for_unsluggable_text(self):
        assert unique_slug(Product, "!!!") == "item"


class TestParseSizes:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, []),
            ("", []),
            (["40", " 41 ", ""], ["40", "41"]),
            ('["40", "41"]', ["40", "41"]),
            ("40, 41,42", ["40", "41", "42"]),
            ("42", ["42"]),
        ],
    )
    def test_formats(self, value, expected):
        assert parse_sizes(value) == expected


def test_parse_bool():
    assert parse_bool(True) is True
    assert parse_bool("true") is True
    assert parse_bool("1") is True
    assert parse_bool("false") is False
    assert parse_bool("") is False
