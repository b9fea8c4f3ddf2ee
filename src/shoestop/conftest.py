"""Shared pytest fixtures for shoestop tests."""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.authtoken.models import Token

User = get_user_model()

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\nIDATx\x9cc\x00\x01"
    b"\x00\x00\x05\x00\x01\r\n-\xb4\x00\x00\x00\x00IEND\xaeB`\x82"
)

ADDRESS = {
    "fullName": "Ayesha Khan",
    "phone": "03001234567",
    "line1": "12 Mall Road",
    "city": "Lahore",
    "province": "Punjab",
}


def make_image(name="shoe.png", content_type="image/png", content=PNG_BYTES):
    return SimpleUploadedFile(name, content, content_type=content_type)


def bearer(user):
    """Django test client kwargs carrying a bearer token for ``user``."""
    token, _ = Token.objects.get_or_create(user=user)
    return {"HTTP_AUTHORIZATION": f"Bearer {token.key}"}


@pytest.fixture
def user(db):
    """Create a customer account."""
    return User.objects.create_user(
        email="customer@example.com",
        password="testpass123",
        name="Test Customer",
        phone="03000000001",
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email="other@example.com",
        password="testpass123",
        name="Other Customer",
        phone="03000000002",
    )


@pytest.fixture
def moderator(db):
    return User.objects.create_user(
        email="mod@example.com",
        password="testpass123",
        name="Shop Moderator",
        role=User.Role.MODERATOR,
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@example.com",
        password="testpass123",
        name="Shop Admin",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def user_auth(user):
    return bearer(user)


@pytest.fixture
def admin_auth(admin_user):
    return bearer(admin_user)


@pytest.fixture
def product(db):
    """Stock-tracked product with a size set."""
    from shoestop.catalog.models import Product

    return Product.objects.create(
        slug="air-runner",
        title="Air Runner",
        sub="Running",
        description="Lightweight running shoe",
        price=Decimal("100.00"),
        sizes=["40", "41", "42"],
        stock=5,
        image_url="/uploads/products/air-runner.png",
        image_name="products/air-runner.png",
    )


@pytest.fixture
def untracked_product(db):
    """Product without stock tracking or sizes."""
    from shoestop.catalog.models import Product

    return Product.objects.create(
        slug="canvas-slip-on",
        title="Canvas Slip-On",
        description="Everyday slip-on",
        price=Decimal("49.50"),
        sizes=[],
        stock=None,
        image_url="/uploads/products/canvas.png",
        image_name="products/canvas.png",
    )


@pytest.fixture
def address():
    return dict(ADDRESS)
