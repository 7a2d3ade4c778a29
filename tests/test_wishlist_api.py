import json

import pytest

from notification import events
from wishlist import store

pytestmark = pytest.mark.django_db

BASE = "/api/v1/wishlist/"


def test_requires_authentication(api_client):
    response = api_client.get(BASE)

    assert response.status_code == 401
    assert response.data["error"] == "Unauthorized"


def test_add_and_list(alice, client_for):
    client = client_for(alice)

    response = client.post(BASE + "add/", {"keyword": " MacBook ", "priority": "high", "max_price": 90000}, format="json")

    assert response.status_code == 201
    item = response.data["item"]
    assert item["keyword"] == "macbook"
    assert item["max_price"] == 90000
    assert item["is_active"] is True

    listed = client.get(BASE).data["wishlist"]
    assert [k["id"] for k in listed] == [item["id"]]


def test_duplicate_keyword_is_409(alice, client_for):
    client = client_for(alice)
    client.post(BASE + "add/", {"keyword": "macbook"}, format="json")

    response = client.post(BASE + "add/", {"keyword": "MACBOOK"}, format="json")

    assert response.status_code == 409
    assert response.data["error"] == "Conflict"


def test_bad_priority_is_400(alice, client_for):
    response = client_for(alice).post(BASE + "add/", {"keyword": "lamp", "priority": "asap"}, format="json")

    assert response.status_code == 400
    assert response.data["error"] == "InvalidArgument"


def test_update_is_partial(alice, client_for):
    item = store.add(alice.id, {"keyword": "macbook", "category": "Electronics"})

    response = client_for(alice).put(BASE + f"update/{item['id']}/", {"is_active": False}, format="json")

    assert response.status_code == 200
    assert response.data["item"]["is_active"] is False
    assert response.data["item"]["category"] == "Electronics"


def test_cannot_touch_someone_elses_keyword(alice, bob, client_for):
    item = store.add(alice.id, {"keyword": "macbook"})

    response = client_for(bob).delete(BASE + f"remove/{item['id']}/")

    assert response.status_code == 404
    assert len(store.list_keywords(alice.id)) == 1


def test_remove_and_clear(alice, client_for):
    client = client_for(alice)
    first = store.add(alice.id, {"keyword": "calculator"})
    store.add(alice.id, {"keyword": "bicycle"})

    response = client.delete(BASE + f"remove/{first['id']}/")
    assert [k["keyword"] for k in response.data["wishlist"]] == ["bicycle"]

    assert client.delete(BASE + "clear/").status_code == 200
    assert client.delete(BASE + "clear/").status_code == 200
    assert client.get(BASE).data["wishlist"] == []


def test_export_csv_download(alice, client_for):
    store.add(alice.id, {"keyword": "macbook", "category": "Electronics", "max_price": 90000})
    store.add(alice.id, {"keyword": "calculus", "is_active": False})

    response = client_for(alice).get(BASE + "export/", {"format": "csv", "timestamps": "false"})

    assert response.status_code == 200
    assert response["Content-Type"].startswith("text/csv")
    assert response["Content-Disposition"].startswith('attachment; filename="wishlist_')
    assert response["Content-Disposition"].endswith('.csv"')
    assert response.content.decode() == (
        "Keyword,Category,Priority,Max Price,Active\n"
        '"macbook","Electronics","medium",90000,true\n'
    )


def test_export_json_with_inactive(alice, client_for):
    store.add(alice.id, {"keyword": "macbook"})
    store.add(alice.id, {"keyword": "calculus", "is_active": False})

    response = client_for(alice).get(BASE + "export/", {"inactiveItems": "true"})

    document = json.loads(response.content)
    assert document["total_items"] == 2
    assert document["user"]["email"] == alice.email


def test_export_unknown_format(alice, client_for):
    response = client_for(alice).get(BASE + "export/", {"format": "xml"})

    assert response.status_code == 400
    assert response.data["error"] == "InvalidArgument"


def test_matches(alice, bob, make_product, client_for):
    product = make_product(bob, title="Casio calculator")
    store.add(alice.id, {"keyword": "calculator"})

    response = client_for(alice).get(BASE + "matches/")

    assert [p["id"] for p in response.data["matches"]] == [product.pk]


def test_suggestions(alice, client_for, make_product):
    make_product(alice, tags=["casio"])

    suggestions = client_for(alice).get(BASE + "suggestions/").data["suggestions"]

    assert suggestions["categories"] == ["Electronics"]
    assert suggestions["popular_tags"] == ["casio"]
    assert len(suggestions["recommended"]) == 10


def test_history(alice, bob, make_product, client_for):
    product = make_product(bob, title="Engineering Textbook")
    events.notify_wishlist_match(alice.id, product)
    events.notify_system(alice.id, "welcome")

    history = client_for(alice).get(BASE + "history/").data["match_history"]

    assert len(history) == 1
    assert history[0]["product"]["title"] == "Engineering Textbook"
