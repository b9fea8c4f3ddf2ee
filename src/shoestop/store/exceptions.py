"""Checkout exceptions."""

from shoestop.core.exceptions import InternalError, ValidationError


class EmptyCartError(ValidationError):
    default_message = "Cart is empty"


class ProductRemovedError(ValidationError):
    """A cart line points at a product that no longer exists."""


class InvalidSizeError(ValidationError):
    pass


class InsufficientStockError(ValidationError):
    pass


class CheckoutError(InternalError):
    """Checkout could not be committed."""

    default_message = "Checkout failed"
