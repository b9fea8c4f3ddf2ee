"""Catalog URL patterns (mounted under /api/)."""

from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    # Products
    path("product", views.ProductListView.as_view(), name="product-list"),
    path("product/<str:slug>", views.ProductDetailView.as_view(), name="product-detail"),

    # Homepage banners
    path("trending", views.TrendingListView.as_view(), name="trending-list"),
    path("trending/<str:slug>", views.TrendingDetailView.as_view(), name="trending-detail"),
    path("most-sales", views.MostSalesListView.as_view(), name="mostsales-list"),
    path("most-sales/<str:slug>", views.MostSalesDetailView.as_view(), name="mostsales-detail"),

    # Features
    path("features", views.FeatureListView.as_view(), name="feature-list"),
    path("features/<str:slug>", views.FeatureDetailView.as_view(), name="feature-detail"),
]
