"""
Per-user notification log.

Entries live newest-first in ``User.notifications``. Inserts always go to
the head and the log is cut back to ``NOTIFICATION_LIMIT`` entries in the
same locked write, so the oldest entry is the one evicted.
"""
import logging
import uuid

from django.utils import timezone
from rest_framework.exceptions import NotFound

from campusmart.conf import app_setting
from campusmart.exceptions import InvalidArgument
from user.aggregate import locked_user, load_user

logger = logging.getLogger(__name__)

WISHLIST_MATCH = "wishlist_match"
PRODUCT_SOLD = "product_sold"
PRODUCT_INTEREST = "product_interest"
SYSTEM = "system"
GENERAL = "general"

NOTIFICATION_TYPES = (WISHLIST_MATCH, PRODUCT_SOLD, PRODUCT_INTEREST, SYSTEM, GENERAL)


def new_entry(type, message, product_id=None):
    if type not in NOTIFICATION_TYPES:
        raise InvalidArgument(f"Unknown notification type: {type}")
    if not message:
        raise InvalidArgument("Notification message is required")
    return {
        "id": uuid.uuid4().hex,
        "type": type,
        "message": message,
        "product_id": product_id,
        "is_read": False,
        "created_at": timezone.now().isoformat(),
    }


def append(user_id, type, message, product_id=None, publisher=None):
    """Insert a new entry at the head of the user's log and return it."""
    entry = new_entry(type, message, product_id)
    limit = app_setting("NOTIFICATION_LIMIT")

    with locked_user(user_id, ["notifications"]) as user:
        user.notifications = [entry] + list(user.notifications)[: limit - 1]

    # the entry is stored at this point; push is best effort
    if publisher is not None:
        try:
            publisher.notify(user_id, entry)
        except Exception:
            logger.exception("Push of notification %s to user %s failed", entry["id"], user_id)
    return entry


def list_entries(user_id):
    return list(load_user(user_id, "notifications").notifications)


def _index_of(entries, entry_id):
    for i, entry in enumerate(entries):
        if entry["id"] == entry_id:
            return i
    raise NotFound("Notification not found")


def mark_read(user_id, entry_id):
    with locked_user(user_id, ["notifications"]) as user:
        entries = list(user.notifications)
        i = _index_of(entries, entry_id)
        entries[i] = {**entries[i], "is_read": True}
        user.notifications = entries
    return entries[i]


def mark_all_read(user_id):
    with locked_user(user_id, ["notifications"]) as user:
        user.notifications = [{**entry, "is_read": True} for entry in user.notifications]


def remove(user_id, entry_id):
    with locked_user(user_id, ["notifications"]) as user:
        entries = list(user.notifications)
        del entries[_index_of(entries, entry_id)]
        user.notifications = entries


def clear(user_id):
    with locked_user(user_id, ["notifications"]) as user:
        user.notifications = []


def unread_count(user_id):
    return sum(1 for entry in list_entries(user_id) if not entry.get("is_read"))
