import json
from datetime import datetime, timezone

import pytest

from campusmart.exceptions import InvalidArgument
from user.models import User
from wishlist.export import export_wishlist

NOW = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def owner():
    return User(
        name="Alice",
        email="alice@campus.edu",
        wishlist=[
            {
                "id": "a1",
                "keyword": "macbook",
                "category": "Electronics",
                "priority": "high",
                "max_price": 90000,
                "is_active": True,
                "created_at": "2024-01-05T10:00:00+00:00",
            },
            {
                "id": "b2",
                "keyword": "calculus",
                "category": 'Books "used"',
                "priority": "low",
                "max_price": None,
                "is_active": False,
                "created_at": "2024-01-06T10:00:00+00:00",
            },
        ],
    )


def test_same_state_exports_identically(owner):
    for fmt in ("json", "csv", "txt"):
        first = export_wishlist(owner, fmt, {"inactiveItems": True}, now=NOW)
        second = export_wishlist(owner, fmt, {"inactiveItems": True}, now=NOW)
        assert first == second


def test_json_skips_inactive_and_unselected_fields(owner):
    options = {"categories": False, "maxPrices": False, "timestamps": False}

    result = export_wishlist(owner, "json", options, now=NOW)
    document = json.loads(result.content)

    assert document["user"] == {"name": "Alice", "email": "alice@campus.edu"}
    assert document["wishlist"] == [{"keyword": "macbook", "priority": "high", "is_active": True}]
    assert document["total_items"] == 1
    assert document["export_date"] == NOW.isoformat()
    assert result.content_type == "application/json"
    assert result.filename == "wishlist_2024-03-01.json"


def test_json_omits_missing_max_price(owner):
    document = json.loads(export_wishlist(owner, "json", {"inactiveItems": True}, now=NOW).content)

    assert document["wishlist"][0]["max_price"] == 90000
    assert "max_price" not in document["wishlist"][1]


def test_csv(owner):
    result = export_wishlist(owner, "csv", {"inactiveItems": True}, now=NOW)

    assert result.content == (
        "Keyword,Category,Priority,Max Price,Created At,Active\n"
        '"macbook","Electronics","high",90000,"2024-01-05T10:00:00+00:00",true\n'
        '"calculus","Books ""used""","low",,"2024-01-06T10:00:00+00:00",false\n'
    )
    assert result.filename == "wishlist_2024-03-01.csv"


def test_csv_column_selection(owner):
    result = export_wishlist(owner, "csv", {"categories": False, "timestamps": False}, now=NOW)

    assert result.content == 'Keyword,Priority,Max Price,Active\n"macbook","high",90000,true\n'


def test_txt(owner):
    result = export_wishlist(owner, "txt", {"inactiveItems": True}, now=NOW)

    assert result.content == (
        "My Wishlist - Exported on 2024-03-01\n"
        "Total Items: 2\n"
        "\n"
        "\n"
        "--- Electronics ---\n"
        "• macbook (high) - Max: ₹90000\n"
        "\n"
        '--- Books "used" ---\n'
        "• calculus (low) [INACTIVE]\n"
    )
    assert result.content_type == "text/plain"


def test_unknown_format(owner):
    with pytest.raises(InvalidArgument):
        export_wishlist(owner, "xml", now=NOW)
