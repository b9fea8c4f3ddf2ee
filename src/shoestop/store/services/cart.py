"""Cart service.

Each user has at most one cart. Lines are keyed by (product, size);
adding the same product and size again increases the quantity.
"""

import logging
import uuid
from decimal import Decimal

from django.db import transaction

from shoestop.catalog.models import Product
from shoestop.core.conf import get_setting
from shoestop.core.exceptions import NotFoundError, ValidationError
from shoestop.store.models import Cart, CartItem
from shoestop.store.pricing import line_subtotal

logger = logging.getLogger(__name__)


def max_qty() -> int:
    return int(get_setting("MAX_CART_QTY"))


def clamp_qty(value) -> int:
    """Coerce a requested quantity into ``[1, MAX_CART_QTY]``."""
    try:
        qty = int(value)
    except (TypeError, ValueError):
        qty = 1
    return min(max(qty, 1), max_qty())


def _find_product(product_id=None, slug=None) -> Product:
    if not product_id and not slug:
        raise ValidationError("productId or slug is required")

    products = Product.objects.all()
    if product_id:
        try:
            product = products.filter(pk=uuid.UUID(str(product_id))).first()
        except ValueError:
            product = None
    else:
        product = products.filter(slug__iexact=str(slug).strip()).first()

    if not product:
        raise NotFoundError("Product not found")
    return product


def _locked_cart(user, create=False):
    """Return the user's cart locked for update, or None."""
    if create:
        Cart.objects.get_or_create(user=user)
    return Cart.objects.select_for_update().filter(user=user).first()


def cart_totals(items) -> tuple[int, Decimal]:
    """Return ``(total_items, subtotal)`` for a list of cart lines."""
    items = list(items)
    return sum(item.qty for item in items), line_subtotal(items)


def cart_to_dict(cart) -> dict:
    items = list(cart.items.all()) if cart else []
    total_items, subtotal = cart_totals(items)
    return {
        "id": cart.pk if cart else None,
        "items": [item.to_dict() for item in items],
        "totalItems": total_items,
        "subtotal": str(subtotal),
    }


def get_cart(user):
    """The user's cart, or None when nothing was ever added."""
    return Cart.objects.filter(user=user).prefetch_related("items").first()


@transaction.atomic
def add_to_cart(user, product_id=None, slug=None, qty=1, size="") -> Cart:
    product = _find_product(product_id, slug)
    qty = clamp_qty(qty)
    size = str(size or "").strip()

    if not product.allows_size(size):
        raise ValidationError("Invalid size selection")

    cart = _locked_cart(user, create=True)
    item = cart.items.filter(product=product, size=size).first()
    if item:
        item.qty = min(item.qty + qty, max_qty())
        item.save(update_fields=["qty", "updated_at"])
    else:
        CartItem.objects.create(
            cart=cart,
            product=product,
            slug=product.slug,
            title=product.title,
            image_url=product.image_url,
            price=product.price,
            size=size,
            qty=qty,
        )

    logger.debug("Cart %s: added %s x %s (%s)", cart.pk, qty, product.slug, size or "-")
    return cart


@transaction.atomic
def update_cart_item(user, item_id, qty=None, size=None) -> Cart:
    """Change the quantity and/or size of one line.

    Moving a line onto a size that already has a line merges the two.
    """
    cart = _locked_cart(user)
    if not cart:
        raise NotFoundError("Cart not found")
    item = cart.items.filter(pk=item_id).first()
    if not item:
        raise NotFoundError("Item not found")

    if qty is not None:
        if isinstance(qty, bool) or not isinstance(qty, (int, str)):
            raise ValidationError("Invalid quantity")
        try:
            qty = int(qty)
        except ValueError:
            raise ValidationError("Invalid quantity")
        if qty < 1 or qty > max_qty():
            raise ValidationError("Invalid quantity")
        item.qty = qty

    if size is not None:
        size = str(size).strip()
        if item.product and not item.product.allows_size(size):
            raise ValidationError("Invalid size selection")
        if size != item.size:
            twin = cart.items.filter(product_id=item.product_id, size=size).exclude(pk=item.pk).first()
            if twin and item.product_id:
                twin.qty = min(twin.qty + item.qty, max_qty())
                twin.save(update_fields=["qty", "updated_at"])
                item.delete()
                return cart
            item.size = size

    item.save()
    return cart


@transaction.atomic
def remove_cart_item(user, item_id) -> Cart:
    cart = _locked_cart(user)
    if not cart:
        raise NotFoundError("Cart not found")
    deleted, _ = cart.items.filter(pk=item_id).delete()
    if not deleted:
        raise NotFoundError("Item not found")
    return cart


@transaction.atomic
def clear_cart(user):
    cart = _locked_cart(user)
    if cart:
        cart.items.all().delete()
    return cart
