"""Catalog models: products and storefront content blocks."""

import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models.functions import Lower


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class CatalogImageModel(TimeStampedModel):
    """Abstract base for catalog rows that carry one stored image.

    ``image_url`` is what clients render; ``image_name`` is the storage
    key used to delete the file.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=220, unique=True)
    image_url = models.CharField(max_length=500)
    image_name = models.CharField(max_length=300)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def image_fields(self):
        return {"imageUrl": self.image_url, "imageName": self.image_name}


class Product(CatalogImageModel):
    """A sellable item.

    ``stock`` is NULL for untracked (unlimited) inventory. Carts and
    orders reference products but keep their own snapshots.
    """

    sub = models.CharField(max_length=120, blank=True)
    title = models.CharField(max_length=200)
    description = models.TextField()
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    sizes = models.JSONField(default=list, blank=True)
    stock = models.PositiveIntegerField(null=True, blank=True)
    is_best_selling = models.BooleanField(default=False)

    class Meta(CatalogImageModel.Meta):
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="product_price_non_negative"),
            models.CheckConstraint(condition=models.Q(stock__gte=0), name="product_stock_non_negative"),
        ]

    def __str__(self):
        return self.title

    @property
    def tracks_stock(self):
        return self.stock is not None

    def allows_size(self, size):
        """An empty size list accepts any size."""
        return not size or not self.sizes or size in self.sizes

    def to_dict(self):
        return {
            "id": str(self.pk),
            "slug": self.slug,
            "sub": self.sub,
            "title": self.title,
            "description": self.description,
            "price": str(self.price),
            "sizes": list(self.sizes or []),
            "stock": self.stock,
            "isBestSelling": self.is_best_selling,
            **self.image_fields(),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


class Banner(CatalogImageModel):
    """Homepage banner with a call-to-action button."""

    heading = models.CharField(max_length=200)
    subheading = models.CharField(max_length=300)
    btn_text = models.CharField(max_length=60)

    class Meta(CatalogImageModel.Meta):
        abstract = True

    def __str__(self):
        return self.heading

    def to_dict(self):
        return {
            "id": str(self.pk),
            "slug": self.slug,
            "heading": self.heading,
            "subheading": self.subheading,
            "btnText": self.btn_text,
            **self.image_fields(),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


class Trending(Banner):
    class Meta(Banner.Meta):
        verbose_name_plural = "trending"


class MostSales(Banner):
    class Meta(Banner.Meta):
        verbose_name = "most sales item"
        verbose_name_plural = "most sales items"
        constraints = [
            models.UniqueConstraint(Lower("heading"), name="mostsales_heading_ci_unique"),
        ]


class Feature(CatalogImageModel):
    """Featured item block shown outside the product grid."""

    sub = models.CharField(max_length=120, blank=True)
    title = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    sizes = models.JSONField(default=list, blank=True)
    description = models.TextField()

    class Meta(CatalogImageModel.Meta):
        constraints = [
            models.UniqueConstraint(Lower("title"), name="feature_title_ci_unique"),
            models.CheckConstraint(condition=models.Q(price__gte=0), name="feature_price_non_negative"),
        ]

    def __str__(self):
        return self.title

    def to_dict(self):
        return {
            "id": str(self.pk),
            "slug": self.slug,
            "sub": self.sub,
            "title": self.title,
            "description": self.description,
            "price": str(self.price),
            "sizes": list(self.sizes or []),
            **self.image_fields(),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
