import pytest

from notification import events, feed

pytestmark = pytest.mark.django_db

BASE = "/api/v1/notifications/"


def test_list_attaches_products(alice, bob, make_product, client_for):
    product = make_product(bob, title="Engineering Textbook")
    events.notify_system(alice.id, "welcome")
    events.notify_wishlist_match(alice.id, product)

    entries = client_for(alice).get(BASE).data["notifications"]

    assert [e["type"] for e in entries] == ["wishlist_match", "system"]
    assert entries[0]["product"]["title"] == "Engineering Textbook"
    assert entries[1]["product"] is None


def test_read_flow(alice, client_for):
    client = client_for(alice)
    first = feed.append(alice.id, feed.SYSTEM, "one")
    feed.append(alice.id, feed.SYSTEM, "two")

    assert client.get(BASE + "unread-count/").data["unread_count"] == 2

    assert client.patch(BASE + f"{first['id']}/read/").status_code == 200
    assert client.get(BASE + "unread-count/").data["unread_count"] == 1

    assert client.patch(BASE + "mark-all-read/").status_code == 200
    assert client.patch(BASE + "mark-all-read/").status_code == 200
    assert client.get(BASE + "unread-count/").data["unread_count"] == 0


def test_unknown_notification(alice, client_for):
    response = client_for(alice).patch(BASE + "missing/read/")

    assert response.status_code == 404
    assert response.data == {"error": "NotFound", "message": "Notification not found"}


def test_delete_and_clear(alice, client_for):
    client = client_for(alice)
    entry = feed.append(alice.id, feed.SYSTEM, "one")
    feed.append(alice.id, feed.SYSTEM, "two")

    assert client.delete(BASE + f"{entry['id']}/").status_code == 200
    assert len(feed.list_entries(alice.id)) == 1

    assert client.delete(BASE).status_code == 200
    assert client.get(BASE).data["notifications"] == []


def test_users_only_see_their_own(alice, bob, client_for):
    entry = feed.append(alice.id, feed.SYSTEM, "private")

    assert client_for(bob).delete(BASE + f"{entry['id']}/").status_code == 404
    assert client_for(bob).get(BASE).data["notifications"] == []


def test_broadcast_is_admin_only(alice, bob, make_user, client_for):
    admin = make_user("Admin", is_staff=True)

    assert client_for(alice).post(BASE + "broadcast/", {"message": "hi"}, format="json").status_code == 403

    response = client_for(admin).post(BASE + "broadcast/", {"message": "Library closes early today"}, format="json")

    assert response.status_code == 200
    assert response.data["delivered"] == 3
    assert feed.list_entries(bob.id)[0]["message"] == "Library closes early today"
