"""Catalog API views.

Reads are public; writes need an admin token. Create and update accept
multipart bodies carrying an ``image`` file, or JSON for text-only edits.
"""

import math

from django.utils.decorators import method_decorator

from shoestop.core.auth import require_admin
from shoestop.core.conf import get_setting
from shoestop.core.http import JsonView, clamp, parse_int, read_payload, success_response

from . import services
from .slugs import parse_bool


class CatalogListView(JsonView):
    """GET lists newest first; POST creates."""

    resource = None

    def get(self, request):
        items = self.resource.model.objects.order_by("-created_at")
        return success_response(data=[obj.to_dict() for obj in items])

    @method_decorator(require_admin)
    def post(self, request):
        data, files = read_payload(request)
        obj = self.resource.create(data, files)
        return success_response(
            status=201,
            message=f"{self.resource.label} created",
            data=obj.to_dict(),
        )


class CatalogDetailView(JsonView):
    """GET/PUT/DELETE one item by slug (case-insensitive)."""

    resource = None

    def get(self, request, slug):
        return success_response(data=self.resource.get(slug).to_dict())

    @method_decorator(require_admin)
    def put(self, request, slug):
        obj = self.resource.get(slug)
        data, files = read_payload(request)
        obj = self.resource.update(obj, data, files)
        return success_response(message=f"{self.resource.label} updated", data=obj.to_dict())

    @method_decorator(require_admin)
    def delete(self, request, slug):
        self.resource.delete(self.resource.get(slug))
        return success_response(message=f"{self.resource.label} deleted")


class ProductListView(CatalogListView):
    """Paginated product grid.

    GET /api/product?page=1&limit=9&bestSelling=true
    """

    resource = services.products

    def get(self, request):
        max_limit = get_setting("PRODUCT_PAGE_LIMIT")
        page = max(parse_int(request.GET.get("page"), 1), 1)
        limit = clamp(parse_int(request.GET.get("limit"), max_limit), 1, max_limit)

        products = self.resource.model.objects.all()
        if "bestSelling" in request.GET:
            products = products.filter(is_best_selling=parse_bool(request.GET["bestSelling"]))

        total = products.count()
        offset = (page - 1) * limit
        rows = products.order_by("-created_at")[offset:offset + limit]

        return success_response(
            data=[p.to_dict() for p in rows],
            pagination={
                "page": page,
                "limit": limit,
                "total": total,
                "totalPages": math.ceil(total / limit),
                "hasNext": offset + limit < total,
                "hasPrev": page > 1,
            },
        )


class ProductDetailView(CatalogDetailView):
    resource = services.products


class TrendingListView(CatalogListView):
    resource = services.trending


class TrendingDetailView(CatalogDetailView):
    resource = services.trending


class MostSalesListView(CatalogListView):
    resource = services.most_sales


class MostSalesDetailView(CatalogDetailView):
    resource = services.most_sales


class FeatureListView(CatalogListView):
    resource = services.features


class FeatureDetailView(CatalogDetailView):
    resource = services.features
