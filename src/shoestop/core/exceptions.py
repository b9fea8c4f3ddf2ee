"""Exceptions shared by every ShoeStop API.

Each error carries the HTTP status the request handler answers with;
``message`` is the only detail that reaches the client.
"""


class ShopError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ShopError):
    """Malformed or missing input, or a broken business rule."""

    status_code = 400
    default_message = "Invalid request"


class UnauthorizedError(ShopError):
    """Missing or invalid credential."""

    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(ShopError):
    """Authenticated, but role or ownership does not allow the action."""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ShopError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ShopError):
    """Duplicate value for a unique key."""

    status_code = 409
    default_message = "Conflict"


class InternalError(ShopError):
    status_code = 500
