"""Cart and order API views."""

from django.utils.decorators import method_decorator
from django.views.decorators.cache import never_cache

from shoestop.core.auth import require_admin, require_auth_token
from shoestop.core.http import JsonView, parse_int, parse_json, success_response

from .services import cart as cart_service
from .services import checkout, orders


def cart_response(user, message=None, status=200):
    payload = {"cart": cart_service.cart_to_dict(cart_service.get_cart(user))}
    if message:
        payload["message"] = message
    return success_response(status=status, **payload)


@method_decorator(never_cache, name="dispatch")
class CartView(JsonView):
    """GET /api/cart"""

    @method_decorator(require_auth_token)
    def get(self, request):
        return cart_response(request.user)


@method_decorator(never_cache, name="dispatch")
class CartAddView(JsonView):
    """Add a product to the cart.

    POST /api/cart/add
    {"productId": "...", "qty": 2, "size": "42"}   (or "slug" instead of "productId")
    """

    @method_decorator(require_auth_token)
    def post(self, request):
        data = parse_json(request)
        cart_service.add_to_cart(
            request.user,
            product_id=data.get("productId"),
            slug=data.get("slug"),
            qty=data.get("qty", 1),
            size=data.get("size", ""),
        )
        return cart_response(request.user, message="Added to cart")


@method_decorator(never_cache, name="dispatch")
class CartItemView(JsonView):
    """PATCH/DELETE /api/cart/item/<id>"""

    @method_decorator(require_auth_token)
    def patch(self, request, item_id):
        data = parse_json(request)
        cart_service.update_cart_item(
            request.user,
            item_id,
            qty=data.get("qty"),
            size=data.get("size"),
        )
        return cart_response(request.user, message="Cart updated")

    @method_decorator(require_auth_token)
    def delete(self, request, item_id):
        cart_service.remove_cart_item(request.user, item_id)
        return cart_response(request.user, message="Item removed")


@method_decorator(never_cache, name="dispatch")
class CartClearView(JsonView):
    """POST /api/cart/clear"""

    @method_decorator(require_auth_token)
    def post(self, request):
        cart_service.clear_cart(request.user)
        return cart_response(request.user, message="Cart cleared")


class OrderCollectionView(JsonView):
    """POST places an order; GET is the admin listing.

    POST /api/orders
    {"shippingAddress": {...}, "billingAddress": {...}, "paymentMethod": "COD", "checkoutToken": "..."}

    GET /api/orders?status=created&q=241017-4821&page=1&limit=20
    """

    @method_decorator(require_auth_token)
    def post(self, request):
        data = parse_json(request)
        result = checkout.place_order(
            request.user,
            shipping_address=data.get("shippingAddress"),
            billing_address=data.get("billingAddress"),
            payment_method=data.get("paymentMethod"),
            idempotency_key=data.get("checkoutToken"),
        )
        if result.idempotent:
            return success_response(order=result.order.to_dict(), idempotent=True)
        return success_response(status=201, order=result.order.to_dict())

    @method_decorator(require_admin)
    def get(self, request):
        listing = orders.admin_list_orders(
            status=request.GET.get("status", "").strip() or None,
            q=request.GET.get("q", ""),
            page=parse_int(request.GET.get("page"), 1),
            limit=parse_int(request.GET.get("limit"), None),
        )
        return success_response(
            orders=[o.to_dict(include_user=True) for o in listing["orders"]],
            pagination=listing["pagination"],
        )


class MyOrdersView(JsonView):
    """GET /api/orders/mine"""

    @method_decorator(require_auth_token)
    def get(self, request):
        return success_response(orders=[o.to_dict() for o in orders.get_my_orders(request.user)])


class OrderDetailView(JsonView):
    """GET /api/orders/<id> (owner or admin)"""

    @method_decorator(require_auth_token)
    def get(self, request, order_id):
        order = orders.get_order_for(order_id, request.user)
        return success_response(order=order.to_dict(include_user=True))


class OrderStatusView(JsonView):
    """PATCH /api/orders/<id>/status  {"status": "shipped"}"""

    @method_decorator(require_admin)
    def patch(self, request, order_id):
        data = parse_json(request)
        order = orders.admin_update_order_status(order_id, data.get("status"), actor=request.user)
        return success_response(message="Order status updated", order=order.to_dict())
