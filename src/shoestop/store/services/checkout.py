"""Checkout: turn a user's cart into an order.

The whole conversion runs in one database transaction. Cart and
products are locked, lines are validated against the live catalog,
the order is written with the cart's prices, stock is decremented and
the cart is emptied. Any failure rolls everything back.

Retried requests are made safe by the client's checkout token. A
read before the transaction returns an existing order early; the
(user, checkout_token) unique constraint settles races between
concurrent duplicates.
"""

import logging
import random
from typing import NamedTuple

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from shoestop.catalog.models import Product
from shoestop.core.conf import get_setting
from shoestop.core.exceptions import ShopError, ValidationError
from shoestop.store.exceptions import (
    CheckoutError,
    EmptyCartError,
    InsufficientStockError,
    InvalidSizeError,
    ProductRemovedError,
)
from shoestop.store.models import Cart, Order, OrderItem
from shoestop.store.pricing import calculate_order_totals

logger = logging.getLogger(__name__)

REQUIRED_ADDRESS_FIELDS = ("fullName", "phone", "line1", "city", "province")

ADDRESS_DEFAULTS = {
    "line2": "",
    "postalCode": "",
    "country": "PK",
}


class CheckoutResult(NamedTuple):
    """Result of placing an order."""

    order: Order
    idempotent: bool


def normalize_address(address, label="shipping") -> dict:
    """Validate an address and return its snapshot."""
    if not isinstance(address, dict):
        raise ValidationError(f"Incomplete {label} address")

    snapshot = {}
    for field in REQUIRED_ADDRESS_FIELDS:
        value = address.get(field)
        value = str(value).strip() if value is not None else ""
        if not value:
            raise ValidationError(f"Incomplete {label} address")
        snapshot[field] = value

    for field, default in ADDRESS_DEFAULTS.items():
        value = address.get(field)
        snapshot[field] = str(value).strip() if value else default
    return snapshot


def generate_order_no(now=None) -> str:
    """Human-friendly order number, e.g. ``241017-4821``."""
    now = now or timezone.now()
    return f"{now:%y%m%d}-{random.randint(1000, 9999)}"


def find_existing_order(user, checkout_token):
    if not checkout_token:
        return None
    return Order.objects.filter(user=user, checkout_token=checkout_token).first()


def _lock_products(cart_items):
    ids = [item.product_id for item in cart_items if item.product_id]
    return {p.pk: p for p in Product.objects.select_for_update().filter(pk__in=ids)}


def _validate_lines(cart_items, products):
    for item in cart_items:
        product = products.get(item.product_id)
        if product is None:
            raise ProductRemovedError(f"Product removed: {item.title}")
        if not product.allows_size(item.size):
            raise InvalidSizeError(f"Invalid size on {product.title}")
        if product.tracks_stock and product.stock < item.qty:
            raise InsufficientStockError(f"Insufficient stock for {product.title}")


def _create_order(user, shipping, billing, payment_method, checkout_token) -> Order:
    cart = Cart.objects.select_for_update().filter(user=user).first()
    if cart is None:
        raise EmptyCartError()
    cart_items = list(cart.items.order_by("id"))
    if not cart_items:
        raise EmptyCartError()

    products = _lock_products(cart_items)
    _validate_lines(cart_items, products)

    totals = calculate_order_totals(cart_items)
    order = Order.objects.create(
        order_no=generate_order_no(),
        user=user,
        subtotal=totals.subtotal,
        shipping_fee=totals.shipping_fee,
        discount=totals.discount,
        total=totals.total,
        currency=get_setting("CURRENCY"),
        shipping_address=shipping,
        billing_address=billing,
        payment_method=payment_method,
        payment_status=Order.PaymentStatus.UNPAID,
        status=Order.Status.CREATED,
        checkout_token=checkout_token,
    )
    OrderItem.objects.bulk_create(
        OrderItem(
            order=order,
            product_id=item.product_id,
            slug=item.slug,
            title=item.title,
            image_url=item.image_url,
            price=item.price,
            size=item.size,
            qty=item.qty,
        )
        for item in cart_items
    )

    for item in cart_items:
        if products[item.product_id].tracks_stock:
            Product.objects.filter(pk=item.product_id).update(stock=F("stock") - item.qty)

    cart.items.all().delete()
    return order


def place_order(
    user,
    shipping_address,
    billing_address=None,
    payment_method=None,
    idempotency_key=None,
) -> CheckoutResult:
    """Place an order from the user's cart.

    Args:
        user: Authenticated customer
        shipping_address: Address dict (fullName, phone, line1, city, province required)
        billing_address: Optional address dict; defaults to the shipping address
        payment_method: COD, CARD or BANK (default from settings)
        idempotency_key: Optional client checkout token

    Returns:
        CheckoutResult with the order and whether it was an idempotent replay

    Raises:
        ValidationError: Bad input, empty cart, removed product, invalid size
            or insufficient stock
        CheckoutError: The order could not be committed
    """
    shipping = normalize_address(shipping_address)
    billing = normalize_address(billing_address, "billing") if billing_address else dict(shipping)

    payment_method = str(payment_method or get_setting("DEFAULT_PAYMENT_METHOD")).strip().upper()
    if payment_method not in Order.PaymentMethod.values:
        raise ValidationError("Invalid payment method")

    checkout_token = str(idempotency_key).strip() if idempotency_key else None
    if checkout_token and len(checkout_token) > 100:
        raise ValidationError("Checkout token is too long")

    existing = find_existing_order(user, checkout_token)
    if existing:
        logger.info("Idempotent checkout replay for order %s", existing.order_no)
        return CheckoutResult(existing, True)

    attempts = int(get_setting("ORDER_NUMBER_ATTEMPTS"))
    for attempt in range(1, attempts + 1):
        try:
            with transaction.atomic():
                order = _create_order(user, shipping, billing, payment_method, checkout_token)
        except IntegrityError:
            existing = find_existing_order(user, checkout_token)
            if existing:
                logger.info("Concurrent duplicate checkout resolved to order %s", existing.order_no)
                return CheckoutResult(existing, True)
            logger.warning("Order number collision for user %s (attempt %s/%s)", user.pk, attempt, attempts)
            continue
        except ShopError as e:
            # A duplicate that waited on the cart lock finds it already emptied
            existing = find_existing_order(user, checkout_token)
            if existing:
                logger.info("Concurrent duplicate checkout resolved to order %s", existing.order_no)
                return CheckoutResult(existing, True)
            logger.info("Checkout rejected for user %s: %s", user.pk, e.message)
            raise
        except Exception as e:
            logger.exception("Checkout failed for user %s", user.pk)
            raise CheckoutError() from e

        logger.info("Order %s placed by user %s, total %s %s", order.order_no, user.pk, order.total, order.currency)
        return CheckoutResult(order, False)

    logger.error("Checkout for user %s gave up after %s order number collisions", user.pk, attempts)
    raise CheckoutError("Could not allocate an order number, please retry")
