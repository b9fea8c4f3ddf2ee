"""Cart and order URL patterns (mounted under /api/)."""

from django.urls import path

from . import views

app_name = "store"

urlpatterns = [
    # Cart
    path("cart", views.CartView.as_view(), name="cart"),
    path("cart/add", views.CartAddView.as_view(), name="cart-add"),
    path("cart/clear", views.CartClearView.as_view(), name="cart-clear"),
    path("cart/item/<int:item_id>", views.CartItemView.as_view(), name="cart-item"),

    # Orders
    path("orders", views.OrderCollectionView.as_view(), name="order-list"),
    path("orders/mine", views.MyOrdersView.as_view(), name="order-mine"),
    path("orders/<str:order_id>", views.OrderDetailView.as_view(), name="order-detail"),
    path("orders/<str:order_id>/status", views.OrderStatusView.as_view(), name="order-status"),
]
