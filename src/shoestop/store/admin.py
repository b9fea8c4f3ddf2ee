from django.contrib import admin

from .models import Cart, CartItem, Order, OrderItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ["user", "updated_at"]
    inlines = [CartItemInline]


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ["product", "slug", "title", "image_url", "price", "size", "qty"]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["order_no", "user", "total", "currency", "status", "payment_status", "created_at"]
    list_filter = ["status", "payment_status", "payment_method"]
    search_fields = ["order_no", "user__email"]
    readonly_fields = ["order_no", "subtotal", "shipping_fee", "discount", "total", "checkout_token", "restocked_at"]
    inlines = [OrderItemInline]
