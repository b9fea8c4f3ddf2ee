"""Cart and order models.

Cart lines and order lines keep a snapshot of the product (slug, title,
image and price) taken when the line was written. The product foreign
key is only a pointer back to the catalog and becomes NULL when the
product is deleted.
"""

import uuid

from django.conf import settings
from django.db import models

from shoestop.catalog.models import TimeStampedModel
from shoestop.core.conf import CART_QTY_LIMIT


class Cart(TimeStampedModel):
    """One cart per user, created on first add."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart",
    )

    def __str__(self):
        return f"Cart of {self.user}"


class LineSnapshot(models.Model):
    """Product snapshot shared by cart lines and order lines."""

    product = models.ForeignKey(
        "catalog.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    slug = models.CharField(max_length=220)
    title = models.CharField(max_length=200)
    image_url = models.CharField(max_length=500, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    size = models.CharField(max_length=20, blank=True, default="")
    qty = models.PositiveIntegerField()

    class Meta:
        abstract = True

    @property
    def line_total(self):
        return self.price * self.qty

    def to_dict(self):
        return {
            "id": self.pk,
            "productId": str(self.product_id) if self.product_id else None,
            "slug": self.slug,
            "title": self.title,
            "imageUrl": self.image_url,
            "price": str(self.price),
            "size": self.size,
            "qty": self.qty,
        }


class CartItem(LineSnapshot, TimeStampedModel):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name="items")

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product", "size"], name="cartitem_unique_product_size"),
            models.CheckConstraint(
                condition=models.Q(qty__gte=1) & models.Q(qty__lte=CART_QTY_LIMIT),
                name="cartitem_qty_range",
            ),
        ]

    def __str__(self):
        return f"{self.qty} x {self.title}"


class Order(TimeStampedModel):
    """A placed order.

    Only the checkout service creates orders. After creation only
    ``status``, ``payment_status`` and ``restocked_at`` change.
    """

    class Status(models.TextChoices):
        CREATED = "created", "Created"
        CONFIRMED = "confirmed", "Confirmed"
        PACKED = "packed", "Packed"
        SHIPPED = "shipped", "Shipped"
        DELIVERED = "delivered", "Delivered"
        CANCELED = "canceled", "Canceled"

    class PaymentStatus(models.TextChoices):
        UNPAID = "unpaid", "Unpaid"
        PAID = "paid", "Paid"
        REFUNDED = "refunded", "Refunded"

    class PaymentMethod(models.TextChoices):
        COD = "COD", "Cash on delivery"
        CARD = "CARD", "Card"
        BANK = "BANK", "Bank transfer"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_no = models.CharField(max_length=20, unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )

    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_fee = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="PKR")

    shipping_address = models.JSONField()
    billing_address = models.JSONField()

    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices, default=PaymentMethod.COD)
    payment_status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.CREATED, db_index=True)

    checkout_token = models.CharField(max_length=100, null=True, blank=True)
    restocked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "checkout_token"],
                condition=models.Q(checkout_token__isnull=False),
                name="order_unique_user_checkout_token",
            ),
        ]

    def __str__(self):
        return self.order_no

    def to_dict(self, include_user=False):
        data = {
            "id": str(self.pk),
            "orderNo": self.order_no,
            "userId": str(self.user_id),
            "items": [item.to_dict() for item in self.items.all()],
            "subtotal": str(self.subtotal),
            "shippingFee": str(self.shipping_fee),
            "discount": str(self.discount),
            "total": str(self.total),
            "currency": self.currency,
            "shippingAddress": self.shipping_address,
            "billingAddress": self.billing_address,
            "paymentMethod": self.payment_method,
            "paymentStatus": self.payment_status,
            "status": self.status,
            "checkoutToken": self.checkout_token,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
        if include_user:
            data["user"] = {
                "id": str(self.user_id),
                "name": self.user.name,
                "email": self.user.email,
            }
        return data


class OrderItem(LineSnapshot):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(qty__gte=1), name="orderitem_qty_positive"),
        ]

    def __str__(self):
        return f"{self.qty} x {self.title} ({self.order_id})"
