"""Slug and form-value helpers for catalog writes."""

import json

from django.utils.text import slugify


def unique_slug(model, text, exclude_pk=None):
    """Slugify ``text`` and suffix ``-2``, ``-3``... until it is free.

    ``exclude_pk`` lets a row keep its own slug when it is renamed.
    """
    root = slugify(text) or "item"
    candidate = root
    n = 1

    taken = model.objects.all()
    if exclude_pk is not None:
        taken = taken.exclude(pk=exclude_pk)

    while taken.filter(slug=candidate).exists():
        n += 1
        candidate = f"{root}-{n}"
    return candidate


def parse_sizes(value):
    """Normalize sizes from a list, a JSON list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        text = str(value).strip()
        if not text:
            return []
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        items = parsed if isinstance(parsed, list) else text.split(",")
    return [str(s).strip() for s in items if str(s).strip()]


def parse_bool(value):
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")
