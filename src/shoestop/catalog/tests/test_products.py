"""Tests for the catalog API: products, banners and features."""

import json
from decimal import Decimal

import pytest
from django.core.files.storage import default_storage
from django.test.client import MULTIPART_CONTENT, encode_multipart, BOUNDARY

from shoestop.catalog.models import Feature, MostSales, Product, Trending
from shoestop.conftest import make_image


def product_form(**overrides):
    data = {
        "title": "Trail Blazer",
        "sub": "Outdoor",
        "description": "Grippy trail shoe",
        "price": "149.99",
        "sizes": "41,42,43",
        "stock": "7",
        "isBestSelling": "true",
        "image": make_image(),
    }
    data.update(overrides)
    return data


def put_multipart(client, url, data, **extra):
    return client.put(url, data=encode_multipart(BOUNDARY, data), content_type=MULTIPART_CONTENT, **extra)


@pytest.mark.django_db
class TestProductCreate:
    """POST /api/product"""

    url = "/api/product"

    def test_admin_creates_product(self, client, admin_auth):
        response = client.post(self.url, product_form(), **admin_auth)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product created"
        data = body["data"]
        assert data["slug"] == "trail-blazer"
        assert data["price"] == "149.99"
        assert data["sizes"] == ["41", "42", "43"]
        assert data["stock"] == 7
        assert data["isBestSelling"] is True
        assert default_storage.exists(data["imageName"])

    def test_duplicate_title_gets_suffixed_slug(self, client, admin_auth, product):
        response = client.post(self.url, product_form(title="Air Runner"), **admin_auth)

        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "air-runner-2"

    def test_blank_stock_is_untracked(self, client, admin_auth):
        response = client.post(self.url, product_form(stock=""), **admin_auth)

        assert response.json()["data"]["stock"] is None

    def test_image_required(self, client, admin_auth):
        data = product_form()
        del data["image"]

        response = client.post(self.url, data, **admin_auth)

        assert response.status_code == 400
        assert response.json()["message"] == "Image is required"

    def test_rejects_non_image(self, client, admin_auth):
        upload = make_image(name="notes.txt", content_type="text/plain", content=b"hello")

        response = client.post(self.url, product_form(image=upload), **admin_auth)

        assert response.status_code == 400
        assert response.json()["message"] == "Only image uploads are allowed"
        assert not Product.objects.exists()

    def test_negative_price(self, client, admin_auth):
        response = client.post(self.url, product_form(price="-1"), **admin_auth)

        assert response.status_code == 400
        assert not Product.objects.exists()

    def test_missing_fields(self, client, admin_auth):
        response = client.post(self.url, product_form(title=""), **admin_auth)

        assert response.status_code == 400
        assert response.json()["message"] == "title, price and description are required"

    def test_requires_admin(self, client, user_auth):
        response = client.post(self.url, product_form(), **user_auth)

        assert response.status_code == 403

    def test_requires_token(self, client, db):
        response = client.post(self.url, product_form())

        assert response.status_code == 401


@pytest.mark.django_db
class TestProductRead:
    """GET /api/product and /api/product/<slug>"""

    def make_products(self, count, **fields):
        for i in range(count):
            Product.objects.create(
                slug=f"shoe-{i}",
                title=f"Shoe {i}",
                description="A shoe",
                price=Decimal("10.00"),
                image_url=f"/uploads/products/{i}.png",
                image_name=f"products/{i}.png",
                **fields,
            )

    def test_pagination(self, client, db):
        self.make_products(12)

        response = client.get("/api/product", {"page": "2", "limit": "5"})

        body = response.json()
        assert len(body["data"]) == 5
        assert body["pagination"] == {
            "page": 2,
            "limit": 5,
            "total": 12,
            "totalPages": 3,
            "hasNext": True,
            "hasPrev": True,
        }

    def test_limit_clamped_to_page_size(self, client, db):
        self.make_products(12)

        response = client.get("/api/product", {"limit": "500"})

        assert response.json()["pagination"]["limit"] == 9
        assert len(response.json()["data"]) == 9

    def test_best_selling_filter(self, client, product):
        self.make_products(2, is_best_selling=True)

        response = client.get("/api/product", {"bestSelling": "true"})

        slugs = {p["slug"] for p in response.json()["data"]}
        assert slugs == {"shoe-0", "shoe-1"}

    def test_detail_case_insensitive(self, client, product):
        response = client.get("/api/product/AIR-RUNNER")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(product.pk)

    def test_detail_not_found(self, client, db):
        response = client.get("/api/product/nothing-here")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}


@pytest.mark.django_db
class TestProductUpdateDelete:
    """PUT/DELETE /api/product/<slug>"""

    def test_json_update_regenerates_slug(self, client, admin_auth, product):
        response = client.put(
            "/api/product/air-runner",
            data=json.dumps({"title": "Air Runner Pro", "price": "120", "stock": "", "isBestSelling": True}),
            content_type="application/json",
            **admin_auth,
        )

        assert response.status_code == 200
        product.refresh_from_db()
        assert product.slug == "air-runner-pro"
        assert product.price == Decimal("120.00")
        assert product.stock is None
        assert product.is_best_selling is True

    def test_update_keeps_untouched_fields(self, client, admin_auth, product):
        client.put(
            "/api/product/air-runner",
            data=json.dumps({"description": "New copy"}),
            content_type="application/json",
            **admin_auth,
        )

        product.refresh_from_db()
        assert product.description == "New copy"
        assert product.stock == 5
        assert product.slug == "air-runner"

    def test_multipart_update_replaces_image(self, client, admin_auth):
        created = client.post("/api/product", product_form(), **admin_auth).json()["data"]

        response = put_multipart(
            client,
            f"/api/product/{created['slug']}",
            {"price": "99", "image": make_image(name="new.png")},
            **admin_auth,
        )

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["price"] == "99.00"
        assert updated["imageName"] != created["imageName"]
        assert default_storage.exists(updated["imageName"])
        assert not default_storage.exists(created["imageName"])

    def test_delete_removes_row_and_image(self, client, admin_auth):
        created = client.post("/api/product", product_form(), **admin_auth).json()["data"]

        response = client.delete(f"/api/product/{created['slug']}", **admin_auth)

        assert response.status_code == 200
        assert response.json()["message"] == "Product deleted"
        assert not Product.objects.filter(slug=created["slug"]).exists()
        assert not default_storage.exists(created["imageName"])

    def test_delete_missing(self, client, admin_auth):
        response = client.delete("/api/product/missing", **admin_auth)

        assert response.status_code == 404


def banner_form(**overrides):
    data = {
        "heading": "Summer Drop",
        "subheading": "New season sneakers",
        "btnText": "Shop now",
        "image": make_image(),
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestBanners:
    """Trending and most-sales banners share their rules."""

    @pytest.mark.parametrize("url,model", [("/api/trending", Trending), ("/api/most-sales", MostSales)])
    def test_create_and_read(self, client, admin_auth, url, model):
        response = client.post(url, banner_form(), **admin_auth)

        assert response.status_code == 201
        slug = response.json()["data"]["slug"]
        assert slug == "summer-drop"
        assert model.objects.count() == 1

        listed = client.get(url).json()["data"]
        assert [b["slug"] for b in listed] == [slug]
        assert client.get(f"{url}/{slug}").json()["data"]["btnText"] == "Shop now"

    @pytest.mark.parametrize("url", ["/api/trending", "/api/most-sales"])
    def test_duplicate_heading(self, client, admin_auth, url):
        client.post(url, banner_form(), **admin_auth)

        response = client.post(url, banner_form(heading="summer drop"), **admin_auth)

        assert response.status_code == 409
        assert response.json()["message"] == "Heading already exists"

    def test_all_text_fields_required(self, client, admin_auth):
        response = client.post("/api/trending", banner_form(btnText=""), **admin_auth)

        assert response.status_code == 400
        assert response.json()["message"] == "All text fields are required"

    def test_update_heading(self, client, admin_auth):
        client.post("/api/most-sales", banner_form(), **admin_auth)

        response = client.put(
            "/api/most-sales/summer-drop",
            data=json.dumps({"heading": "Winter Drop"}),
            content_type="application/json",
            **admin_auth,
        )

        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "winter-drop"
        assert response.json()["message"] == "Most Sales item updated"


@pytest.mark.django_db
class TestFeatures:
    url = "/api/features"

    def form(self, **overrides):
        data = {
            "title": "Limited Edition",
            "price": "250",
            "description": "Only 50 pairs",
            "sizes": '["42", "43"]',
            "image": make_image(),
        }
        data.update(overrides)
        return data

    def test_create(self, client, admin_auth):
        response = client.post(self.url, self.form(), **admin_auth)

        assert response.status_code == 201
        assert response.json()["data"]["sizes"] == ["42", "43"]
        assert Feature.objects.get().price == Decimal("250.00")

    def test_duplicate_title(self, client, admin_auth):
        client.post(self.url, self.form(), **admin_auth)

        response = client.post(self.url, self.form(title="LIMITED EDITION"), **admin_auth)

        assert response.status_code == 409
        assert response.json()["message"] == "Title already exists"

    def test_public_list(self, client, admin_auth):
        client.post(self.url, self.form(), **admin_auth)

        response = client.get(self.url)

        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

    def test_requires_admin(self, client, user_auth):
        response = client.post(self.url, self.form(), **user_auth)

        assert response.status_code == 403
