"""JSON request/response helpers shared by the API views."""

import json
import logging

from django.db import IntegrityError
from django.http import JsonResponse, QueryDict
from django.utils.datastructures import MultiValueDict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from .exceptions import ShopError, ValidationError

logger = logging.getLogger(__name__)


def success_response(status=200, **payload):
    return JsonResponse({"success": True, **payload}, status=status)


def error_response(message, status):
    return JsonResponse({"success": False, "message": message}, status=status)


def parse_json(request):
    """Decode a JSON object body. An empty body is an empty object."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Invalid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def read_payload(request):
    """Return ``(data, files)`` for a JSON, urlencoded or multipart body.

    Django only parses form bodies for POST, so PUT/PATCH multipart
    uploads go through the request's own multipart parser.
    """
    content_type = request.content_type or ""
    if content_type.startswith("multipart/form-data"):
        if request.method == "POST":
            return request.POST, request.FILES
        return request.parse_file_upload(request.META, request)
    if content_type == "application/x-www-form-urlencoded":
        if request.method == "POST":
            return request.POST, MultiValueDict()
        return QueryDict(request.body, encoding=request.encoding), MultiValueDict()
    return parse_json(request), MultiValueDict()


def parse_int(value, default):
    """Parse a query/body integer, falling back to ``default``."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def clamp(value, lower, upper):
    return min(max(value, lower), upper)


class JsonView(View):
    """Base view for the JSON API.

    Every response carries the ``success`` envelope. Shop errors become
    their status code and message; anything unexpected is logged and
    reported as a bare 500.
    """

    http_method_names = ["get", "post", "put", "patch", "delete", "options"]

    @method_decorator(csrf_exempt)
    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except ShopError as e:
            return error_response(e.message, e.status_code)
        except IntegrityError as e:
            logger.warning("Integrity error on %s %s: %s", request.method, request.path, e)
            return error_response("Duplicate value", 409)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return error_response("Internal server error", 500)

    def http_method_not_allowed(self, request, *args, **kwargs):
        return error_response("Method not allowed", 405)
