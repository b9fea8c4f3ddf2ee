from django.contrib import admin

from .models import Feature, MostSales, Product, Trending


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "price", "stock", "is_best_selling", "created_at"]
    list_filter = ["is_best_selling"]
    search_fields = ["title", "slug"]


@admin.register(Trending, MostSales)
class BannerAdmin(admin.ModelAdmin):
    list_display = ["heading", "slug", "created_at"]
    search_fields = ["heading", "slug"]


@admin.register(Feature)
class FeatureAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "price", "created_at"]
    search_fields = ["title", "slug"]
