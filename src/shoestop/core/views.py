"""Core views: health, authentication and user administration."""

import logging
import math

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.db.models import ProtectedError, Q
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from rest_framework.authtoken.models import Token

from .auth import require_admin, require_auth_token, require_role
from .conf import get_setting
from .exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from .http import JsonView, clamp, error_response, parse_int, parse_json, success_response

logger = logging.getLogger(__name__)

User = get_user_model()


def health_check(request):
    """Health check endpoint for container orchestration."""
    from django.db import connection

    try:
        # Check database connection
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({"success": True, "ok": True, "database": "connected"})
    except Exception as e:
        logger.error("Health check failed: %s", e)
        return JsonResponse(
            {"success": False, "ok": False, "message": "Database unavailable"},
            status=503,
        )


def not_found(request, exception=None):
    """JSON 404 for unknown routes."""
    return error_response("Not found", 404)


def server_error(request):
    return error_response("Internal server error", 500)


class RegisterView(JsonView):
    """Create a customer account.

    POST /api/auth/register
    {"name": "...", "email": "...", "phone": "...", "password": "..."}

    The role is never taken from the body; new accounts are plain users.
    """

    def post(self, request):
        data = parse_json(request)
        name = str(data.get("name") or "").strip()
        email = str(data.get("email") or "").strip().lower()
        phone = str(data.get("phone") or "").strip()
        password = str(data.get("password") or "")

        if not name or not email or not phone or not password:
            raise ValidationError("name, email, phone and password are required")

        try:
            validate_email(email)
        except DjangoValidationError:
            raise ValidationError("Invalid email address")

        try:
            validate_password(password, user=User(email=email, name=name))
        except DjangoValidationError as e:
            raise ValidationError(" ".join(e.messages))

        if User.objects.filter(email__iexact=email).exists():
            raise ConflictError("Email already exists")

        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, name=name, phone=phone)

        logger.info("Registered user %s", user.pk)
        return success_response(
            status=201,
            message="User registered successfully",
            user=user.to_dict(),
        )


class LoginView(JsonView):
    """Exchange email and password for an API token.

    POST /api/auth/login
    {"email": "user@example.com", "password": "secret"}
    """

    def post(self, request):
        data = parse_json(request)
        email = str(data.get("email") or "").strip().lower()
        password = str(data.get("password") or "")

        if not email or not password:
            raise ValidationError("Email and password are required")

        user = authenticate(request, username=email, password=password)
        if not user:
            return error_response("Invalid credentials", 401)

        token, _ = Token.objects.get_or_create(user=user)
        return success_response(
            message="Login successful",
            token=token.key,
            user=user.to_dict(),
        )


class MeView(JsonView):
    """GET /api/auth/me"""

    @method_decorator(require_auth_token)
    def get(self, request):
        return success_response(user=request.user.to_dict())


class UserListView(JsonView):
    """List accounts for the back office.

    GET /api/user/all?page=1&pageSize=15&q=ali&role=user
    """

    @method_decorator(require_role("admin", "moderator"))
    def get(self, request):
        page = max(parse_int(request.GET.get("page"), 1), 1)
        page_size = clamp(parse_int(request.GET.get("pageSize"), get_setting("USER_PAGE_LIMIT")), 1, 100)
        q = request.GET.get("q", "").strip()
        role = request.GET.get("role", "").strip().lower()

        users = User.objects.all()
        if q:
            users = users.filter(Q(name__icontains=q) | Q(email__icontains=q) | Q(phone__icontains=q))
        if role in User.Role.values:
            users = users.filter(role=role)

        total = users.count()
        offset = (page - 1) * page_size
        rows = users.order_by("-date_joined")[offset:offset + page_size]
        total_pages = max(math.ceil(total / page_size), 1)

        return success_response(
            users=[u.to_dict() for u in rows],
            page=page,
            pageSize=page_size,
            total=total,
            totalPages=total_pages,
            hasPrev=page > 1,
            hasNext=page < total_pages,
        )


class UserRoleView(JsonView):
    """PATCH /api/user/role  {"email": "...", "role": "moderator"}"""

    @method_decorator(require_admin)
    def patch(self, request):
        data = parse_json(request)
        email = str(data.get("email") or "").strip().lower()
        role = str(data.get("role") or "").strip().lower()

        if not email or not role:
            raise ValidationError("email and role are required")
        if role not in User.Role.values:
            raise ValidationError("Invalid role")

        user = User.objects.filter(email__iexact=email).first()
        if not user:
            raise NotFoundError("User not found")

        user.role = role
        user.save(update_fields=["role"])
        logger.info("User %s role set to %s by %s", user.pk, role, request.user.pk)

        return success_response(message="User role updated successfully", user=user.to_dict())


class UserDeleteView(JsonView):
    """DELETE /api/user/<email>

    Moderators may delete only plain user accounts; nobody may delete
    their own account.
    """

    @method_decorator(require_role("admin", "moderator"))
    def delete(self, request, email):
        target = User.objects.filter(email__iexact=email.strip()).first()
        if not target:
            raise NotFoundError("User not found")

        if target.pk == request.user.pk:
            raise ForbiddenError("You cannot delete your own account")

        if not request.user.is_admin and target.role != User.Role.USER:
            raise ForbiddenError("Moderators can delete only user accounts")

        try:
            with transaction.atomic():
                target.delete()
        except ProtectedError:
            raise ConflictError("User has orders and cannot be deleted")

        logger.info("User %s deleted by %s", target.email, request.user.pk)
        return success_response(message=f"Deleted {target.email} ({target.role}) successfully")
