"""Bearer-token authentication and role guards for the JSON API."""

import functools
import logging

from rest_framework.authtoken.models import Token

from .http import error_response

logger = logging.getLogger(__name__)


def get_token_user(request):
    """Resolve the ``Authorization: Bearer <token>`` header to a user.

    Returns ``(user, error_response)``; exactly one of them is None.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None, error_response("No token provided", 401)

    key = auth_header[7:].strip()  # Remove "Bearer " prefix
    try:
        token = Token.objects.select_related("user").get(key=key)
    except Token.DoesNotExist:
        return None, error_response("Invalid or expired token", 401)

    if not token.user.is_active:
        return None, error_response("Invalid token user", 401)
    return token.user, None


def require_auth_token(view_func):
    """Decorator to require Bearer token authentication."""

    @functools.wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user, denied = get_token_user(request)
        if denied:
            return denied
        request.user = user
        return view_func(request, *args, **kwargs)

    return wrapper


def require_role(*roles):
    """Decorator allowing only users whose role is in ``roles``.

    Implies ``require_auth_token``. Superusers count as admins.
    """

    def decorator(view_func):
        @functools.wraps(view_func)
        @require_auth_token
        def wrapper(request, *args, **kwargs):
            user = request.user
            role = "admin" if user.is_superuser else user.role
            if role not in roles:
                logger.info("Denied %s %s to %s (role %s)", request.method, request.path, user.pk, role)
                if roles == ("admin",):
                    return error_response("Access denied: admin only", 403)
                return error_response("Contact an admin to access this resource", 403)
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator


require_admin = require_role("admin")
