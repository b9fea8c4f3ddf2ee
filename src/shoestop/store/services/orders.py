"""Order queries and back-office status changes."""

import logging
import math
import re
import uuid

from django.db import transaction
from django.db.models import CharField, F, Q, Value
from django.db.models.functions import Cast, Replace
from django.utils import timezone

from shoestop.catalog.models import Product
from shoestop.core.conf import get_setting
from shoestop.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from shoestop.store.models import Order

logger = logging.getLogger(__name__)

ID_PREFIX_RE = re.compile(r"^[a-fA-F0-9]{3,32}$")


def _parse_uuid(value):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def _orders():
    return Order.objects.select_related("user").prefetch_related("items")


def get_my_orders(user):
    """All orders of ``user``, newest first."""
    return list(_orders().filter(user=user).order_by("-created_at"))


def get_order_for(order_id, requester) -> Order:
    """Fetch one order for its owner or an admin."""
    pk = _parse_uuid(order_id)
    order = _orders().filter(pk=pk).first() if pk else None
    if not order:
        raise NotFoundError("Order not found")
    if order.user_id != requester.pk and not requester.is_admin:
        raise ForbiddenError("Forbidden")
    return order


def with_id_hex(orders):
    """Annotate ``id_hex``: the order id as dashless lowercase hex.

    PostgreSQL renders UUIDs with dashes, SQLite without.
    """
    return orders.annotate(
        id_hex=Replace(Cast("id", output_field=CharField()), Value("-"), Value(""))
    )


def search_filter(q: str) -> Q:
    """Match an order number, a full order id or a hex id prefix.

    Use on a queryset annotated by ``with_id_hex()``.
    """
    q = q.strip()
    match = Q(order_no=q)
    if q.isdigit():
        match |= Q(order_no=str(int(q)))

    pk = _parse_uuid(q)
    if pk:
        match |= Q(pk=pk)
    elif ID_PREFIX_RE.match(q):
        match |= Q(id_hex__istartswith=q.lower())
    return match


def admin_list_orders(status=None, q=None, page=1, limit=None) -> dict:
    """Filtered, paginated order listing for the back office."""
    default_limit = get_setting("ORDER_PAGE_LIMIT")
    max_limit = get_setting("ORDER_PAGE_MAX")
    page = max(page or 1, 1)
    limit = min(max(limit or default_limit, 1), max_limit)

    orders = _orders()
    if status:
        orders = orders.filter(status=status)
    if q and q.strip():
        orders = with_id_hex(orders).filter(search_filter(q))

    total = orders.count()
    offset = (page - 1) * limit
    rows = list(orders.order_by("-created_at")[offset:offset + limit])

    return {
        "orders": rows,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }


@transaction.atomic
def admin_update_order_status(order_id, new_status, actor=None) -> Order:
    """Move an order to ``new_status``.

    Cancelling returns stock-tracked quantities to the catalog once.
    Canceled orders stay canceled.
    """
    new_status = str(new_status or "").strip().lower()
    if new_status not in Order.Status.values:
        raise ValidationError("Invalid status")

    pk = _parse_uuid(order_id)
    order = Order.objects.select_for_update().filter(pk=pk).first() if pk else None
    if not order:
        raise NotFoundError("Order not found")

    if order.status == new_status:
        return order
    if order.status == Order.Status.CANCELED:
        raise ValidationError("Canceled orders cannot change status")

    old_status = order.status
    order.status = new_status
    update_fields = ["status", "updated_at"]

    if new_status == Order.Status.CANCELED and order.restocked_at is None:
        _restock(order)
        order.restocked_at = timezone.now()
        update_fields.append("restocked_at")

    order.save(update_fields=update_fields)
    logger.info(
        "Order %s status %s -> %s by %s",
        order.order_no,
        old_status,
        new_status,
        getattr(actor, "pk", None),
    )
    return order


def _restock(order):
    for item in order.items.filter(product__isnull=False):
        restocked = Product.objects.filter(pk=item.product_id, stock__isnull=False).update(
            stock=F("stock") + item.qty
        )
        if restocked:
            logger.info("Restocked %s x %s from order %s", item.qty, item.slug, order.order_no)
