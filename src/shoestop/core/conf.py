"""Shop configuration."""

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

# Upper bound of the cart line quantity check constraint
CART_QTY_LIMIT = 10


def get_config():
    """Get shop configuration from settings."""
    defaults = {
        # Money
        "CURRENCY": "PKR",
        "SHIPPING_FEE": "0",
        "DISCOUNT": "0",

        # Cart
        "MAX_CART_QTY": 10,

        # Checkout
        "DEFAULT_PAYMENT_METHOD": "COD",
        "ORDER_NUMBER_ATTEMPTS": 3,

        # Listings
        "ORDER_PAGE_LIMIT": 20,
        "ORDER_PAGE_MAX": 100,
        "PRODUCT_PAGE_LIMIT": 9,
        "USER_PAGE_LIMIT": 15,

        # Uploads
        "UPLOAD_MAX_BYTES": 5 * 1024 * 1024,
    }

    user_config = getattr(settings, "SHOP", {})
    config = {**defaults, **user_config}

    max_qty = config["MAX_CART_QTY"]
    if not isinstance(max_qty, int) or not 1 <= max_qty <= CART_QTY_LIMIT:
        raise ImproperlyConfigured(f"SHOP['MAX_CART_QTY'] must be an integer between 1 and {CART_QTY_LIMIT}")
    return config


def get_setting(name, default=None):
    """Get a specific shop setting."""
    config = get_config()
    return config.get(name, default)


def get_money_setting(name):
    """Get a money setting as a Decimal."""
    return Decimal(str(get_setting(name, "0")))
