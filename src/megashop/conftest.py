"""Shared pytest fixtures for MegaShop tests."""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import Client
from django.utils import timezone

User = get_user_model()

PASSWORD = "Shop-pass-2024!"


@pytest.fixture(autouse=True)
def clear_cache():
    """Setting reads are cached; start each test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def admin_user(db):
    """Create a user with the admin role."""
    return User.objects.create_user(
        email="admin@megashop.test",
        password=PASSWORD,
        name="Store Admin",
        role=User.Role.ADMIN,
        email_verified_at=timezone.now(),
    )


@pytest.fixture
def customer(db):
    """Create a regular customer."""
    return User.objects.create_user(
        email="customer@example.com",
        password=PASSWORD,
        name="Rahim Uddin",
        email_verified_at=timezone.now(),
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(
        email="other@example.com",
        password=PASSWORD,
        name="Karim Mia",
        email_verified_at=timezone.now(),
    )


@pytest.fixture
def admin_client(admin_user):
    """Django test client signed in as the admin."""
    client = Client()
    client.force_login(admin_user)
    return client


@pytest.fixture
def customer_client(customer):
    """Django test client signed in as the customer."""
    client = Client()
    client.force_login(customer)
    return client


@pytest.fixture
def inertia():
    """Headers that make page views answer with the JSON page object."""
    return {"HTTP_X_INERTIA": "true"}


@pytest.fixture
def category(db):
    from megashop.catalog.models import Category

    return Category.objects.create(name="Electronics", slug="electronics")


@pytest.fixture
def product(db, category):
    """A product with stock."""
    from megashop.catalog.models import Product

    return Product.objects.create(
        name="Wireless Headphones",
        price=Decimal("1500.00"),
        description="Over-ear, 30 hour battery.",
        category=category,
        category_name=category.name,
        stock=10,
    )


@pytest.fixture
def second_product(db, category):
    from megashop.catalog.models import Product

    return Product.objects.create(
        name="Bluetooth Speaker",
        price=Decimal("800.50"),
        category=category,
        category_name=category.name,
        stock=3,
    )
