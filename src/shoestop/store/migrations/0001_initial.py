# Initial cart and order models

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def line_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("slug", models.CharField(max_length=220)),
        ("title", models.CharField(max_length=200)),
        ("image_url", models.CharField(blank=True, max_length=500)),
        ("price", models.DecimalField(decimal_places=2, max_digits=12)),
        ("size", models.CharField(blank=True, default="", max_length=20)),
        ("qty", models.PositiveIntegerField()),
        (
            "product",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="catalog.product",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Cart",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cart",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="CartItem",
            fields=line_fields() + [
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "cart",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="store.cart",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(fields=("cart", "product", "size"), name="cartitem_unique_product_size"),
                    models.CheckConstraint(
                        condition=models.Q(("qty__gte", 1), ("qty__lte", 10)),
                        name="cartitem_qty_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("order_no", models.CharField(max_length=20, unique=True)),
                ("subtotal", models.DecimalField(decimal_places=2, max_digits=12)),
                ("shipping_fee", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("discount", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ("total", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="PKR", max_length=3)),
                ("shipping_address", models.JSONField()),
                ("billing_address", models.JSONField()),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("COD", "Cash on delivery"), ("CARD", "Card"), ("BANK", "Bank transfer")],
                        default="COD",
                        max_length=10,
                    ),
                ),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("unpaid", "Unpaid"), ("paid", "Paid"), ("refunded", "Refunded")],
                        default="unpaid",
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("created", "Created"),
                            ("confirmed", "Confirmed"),
                            ("packed", "Packed"),
                            ("shipped", "Shipped"),
                            ("delivered", "Delivered"),
                            ("canceled", "Canceled"),
                        ],
                        db_index=True,
                        default="created",
                        max_length=10,
                    ),
                ),
                ("checkout_token", models.CharField(blank=True, max_length=100, null=True)),
                ("restocked_at", models.DateTimeField(blank=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("checkout_token__isnull", False)),
                        fields=("user", "checkout_token"),
                        name="order_unique_user_checkout_token",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=line_fields() + [
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="store.order",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("qty__gte", 1)), name="orderitem_qty_positive"),
                ],
            },
        ),
    ]
