# Initial catalog models

import uuid

import django.core.validators
import django.db.models.functions.text
from django.db import migrations, models


def image_fields():
    return [
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("slug", models.SlugField(max_length=220, unique=True)),
        ("image_url", models.CharField(max_length=500)),
        ("image_name", models.CharField(max_length=300)),
    ]


def banner_fields():
    return image_fields() + [
        ("heading", models.CharField(max_length=200)),
        ("subheading", models.CharField(max_length=300)),
        ("btn_text", models.CharField(max_length=60)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=image_fields() + [
                ("sub", models.CharField(blank=True, max_length=120)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField()),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("sizes", models.JSONField(blank=True, default=list)),
                ("stock", models.PositiveIntegerField(blank=True, null=True)),
                ("is_best_selling", models.BooleanField(default=False)),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "constraints": [
                    models.CheckConstraint(condition=models.Q(price__gte=0), name="product_price_non_negative"),
                    models.CheckConstraint(condition=models.Q(stock__gte=0), name="product_stock_non_negative"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Trending",
            fields=banner_fields(),
            options={
                "verbose_name_plural": "trending",
                "ordering": ["-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="MostSales",
            fields=banner_fields(),
            options={
                "verbose_name": "most sales item",
                "verbose_name_plural": "most sales items",
                "ordering": ["-created_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("heading"),
                        name="mostsales_heading_ci_unique",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Feature",
            fields=image_fields() + [
                ("sub", models.CharField(blank=True, max_length=120)),
                ("title", models.CharField(max_length=200)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                ("sizes", models.JSONField(blank=True, default=list)),
                ("description", models.TextField()),
            ],
            options={
                "ordering": ["-created_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("title"),
                        name="feature_title_ci_unique",
                    ),
                    models.CheckConstraint(condition=models.Q(price__gte=0), name="feature_price_non_negative"),
                ],
            },
        ),
    ]
