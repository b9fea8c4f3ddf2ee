"""Catalog service layer.

Create, update and delete for every slug-addressed catalog entity.
Views should call these instead of saving models directly, so image
files and slugs stay consistent with the rows that reference them.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, transaction

from shoestop.core.exceptions import ConflictError, NotFoundError, ValidationError

from .models import Feature, MostSales, Product, Trending
from .slugs import parse_bool, parse_sizes, unique_slug
from .uploads import remove_image, store_image

logger = logging.getLogger(__name__)


def _text(data, key):
    """Stripped string value, or None when absent or not a string."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else None


def _price(value, message):
    try:
        price = Decimal(str(value).strip()).quantize(Decimal("0.01"))
    except (InvalidOperation, ValueError):
        raise ValidationError(message)
    if price < 0:
        raise ValidationError(message)
    return price


def _stock(value):
    """Blank means untracked inventory."""
    if value is None or str(value).strip().lower() in ("", "null", "none"):
        return None
    try:
        stock = int(str(value).strip())
    except ValueError:
        raise ValidationError("Stock must be a whole number ≥ 0")
    if stock < 0:
        raise ValidationError("Stock must be a whole number ≥ 0")
    return stock


def _sizes(data):
    if hasattr(data, "getlist") and len(data.getlist("sizes")) > 1:
        return parse_sizes(data.getlist("sizes"))
    return parse_sizes(data.get("sizes"))


class CatalogResource:
    """Write rules for one catalog model.

    Subclasses set the model, the storage folder and ``apply()``, which
    validates request data onto an instance without saving it.
    """

    model = None
    folder = "misc"
    label = "Item"
    slug_source = "title"
    unique_field = None
    unique_message = "Already exists"

    def apply(self, instance, data, creating):
        raise NotImplementedError

    def get(self, slug):
        obj = self.model.objects.filter(slug__iexact=slug).first()
        if not obj:
            raise NotFoundError(f"{self.label} not found")
        return obj

    def check_unique(self, instance):
        if not self.unique_field:
            return
        value = getattr(instance, self.unique_field)
        clash = self.model.objects.filter(**{f"{self.unique_field}__iexact": value})
        if instance.pk and not instance._state.adding:
            clash = clash.exclude(pk=instance.pk)
        if clash.exists():
            raise ConflictError(self.unique_message)

    def create(self, data, files):
        upload = files.get("image")
        if not upload:
            raise ValidationError("Image is required")

        instance = self.model()
        self.apply(instance, data, creating=True)
        self.check_unique(instance)

        image = store_image(upload, self.folder)
        instance.image_url = image.url
        instance.image_name = image.name
        try:
            with transaction.atomic():
                instance.slug = unique_slug(self.model, getattr(instance, self.slug_source))
                instance.save()
        except IntegrityError:
            remove_image(image.name)
            raise ConflictError(f"Duplicate {self.label.lower()}")

        logger.info("Created %s %s", self.model.__name__, instance.slug)
        return instance

    def update(self, instance, data, files):
        old_source = getattr(instance, self.slug_source)
        old_image = instance.image_name

        self.apply(instance, data, creating=False)
        self.check_unique(instance)

        upload = files.get("image")
        image = store_image(upload, self.folder) if upload else None
        if image:
            instance.image_url = image.url
            instance.image_name = image.name
        try:
            with transaction.atomic():
                if getattr(instance, self.slug_source) != old_source:
                    instance.slug = unique_slug(
                        self.model, getattr(instance, self.slug_source), exclude_pk=instance.pk
                    )
                instance.save()
        except IntegrityError:
            if image:
                remove_image(image.name)
            raise ConflictError(f"Duplicate {self.label.lower()}")

        if image:
            remove_image(old_image)
        logger.info("Updated %s %s", self.model.__name__, instance.slug)
        return instance

    def delete(self, instance):
        image_name = instance.image_name
        with transaction.atomic():
            instance.delete()
        remove_image(image_name)
        logger.info("Deleted %s %s", self.model.__name__, instance.slug)


class ProductResource(CatalogResource):
    model = Product
    folder = "products"
    label = "Product"

    def apply(self, instance, data, creating):
        title = _text(data, "title")
        description = _text(data, "description")
        price = data.get("price")

        if creating:
            if not title or price in (None, "") or not description:
                raise ValidationError("title, price and description are required")
            instance.stock = _stock(data.get("stock"))

        if title:
            instance.title = title
        if description:
            instance.description = description
        if price not in (None, ""):
            instance.price = _price(price, "Price must be a number ≥ 0")

        sub = _text(data, "sub")
        if sub is not None:
            instance.sub = sub
        if creating or data.get("sizes") is not None:
            instance.sizes = _sizes(data)
        if data.get("isBestSelling") is not None:
            instance.is_best_selling = parse_bool(data.get("isBestSelling"))
        if not creating and "stock" in data:
            instance.stock = _stock(data.get("stock"))


class BannerResource(CatalogResource):
    slug_source = "heading"
    unique_field = "heading"
    unique_message = "Heading already exists"

    def apply(self, instance, data, creating):
        heading = _text(data, "heading")
        subheading = _text(data, "subheading")
        btn_text = _text(data, "btnText")

        if creating and not (heading and subheading and btn_text):
            raise ValidationError("All text fields are required")

        if heading:
            instance.heading = heading
        if subheading:
            instance.subheading = subheading
        if btn_text:
            instance.btn_text = btn_text


class TrendingResource(BannerResource):
    model = Trending
    folder = "trending"
    label = "Trending item"


class MostSalesResource(BannerResource):
    model = MostSales
    folder = "mostsales"
    label = "Most Sales item"


class FeatureResource(CatalogResource):
    model = Feature
    folder = "features"
    label = "Feature"
    unique_field = "title"
    unique_message = "Title already exists"

    def apply(self, instance, data, creating):
        title = _text(data, "title")
        description = _text(data, "description")
        price = data.get("price")

        if creating and (not title or price in (None, "") or not description):
            raise ValidationError("Title, price and description are required")

        if title:
            instance.title = title
        if description:
            instance.description = description
        if price not in (None, ""):
            instance.price = _price(price, "Price must be a number ≥ 0")

        sub = _text(data, "sub")
        if sub is not None:
            instance.sub = sub
        if creating or data.get("sizes") is not None:
            instance.sizes = _sizes(data)


products = ProductResource()
trending = TrendingResource()
most_sales = MostSalesResource()
features = FeatureResource()
