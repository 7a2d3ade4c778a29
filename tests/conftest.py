"""
Shared fixtures.

Matching runs inline, push is off and mail goes to ``mail.outbox`` unless a
test turns them back on.
"""
import itertools
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from product.models import Product
from user.models import User


@pytest.fixture(autouse=True)
def campusmart_settings(settings, tmp_path):
    settings.CAMPUSMART = {
        **settings.CAMPUSMART,
        "WISHLIST_MATCH_ASYNC": False,
        "NOTIFICATION_PUBLISHER": None,
    }
    settings.MEDIA_ROOT = tmp_path / "media"
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    return settings


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def make(name=None, **extra):
        n = next(counter)
        return User.objects.create_user(
            email=extra.pop("email", f"student{n}@campus.edu"),
            name=name or f"Student {n}",
            college=extra.pop("college", "IIT Bombay"),
            year=extra.pop("year", "2nd Year"),
            password=extra.pop("password", "secret123"),
            **extra,
        )

    return make


@pytest.fixture
def alice(make_user):
    return make_user("Alice")


@pytest.fixture
def bob(make_user):
    return make_user("Bob")


@pytest.fixture
def make_product(db):
    def make(seller, **fields):
        data = {
            "title": "Casio fx-991EX Calculator",
            "description": "Barely used scientific calculator",
            "price": Decimal("1200"),
            "category": "Electronics",
            "condition": "Like New",
            "location": "Hostel 4",
            "tags": [],
        }
        data.update(fields)
        return Product.objects.create(seller=seller, **data)

    return make


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def make(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return make
