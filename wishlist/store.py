"""
Wishlist keyword store.

Keywords are dicts kept in insertion order in ``User.wishlist``::

    {"id", "keyword", "category", "priority", "max_price", "is_active", "created_at"}

``keyword`` is stored lowercased and trimmed, and no two keywords of one
user may normalize to the same text.
"""
import logging
import uuid
from decimal import Decimal, InvalidOperation

from django.utils import timezone
from rest_framework.exceptions import NotFound

from campusmart.conf import app_setting
from campusmart.exceptions import Conflict, InvalidArgument
from user.aggregate import locked_user, load_user

logger = logging.getLogger(__name__)

PRIORITIES = ("low", "medium", "high")
PRIORITY_RANK = {"low": 1, "medium": 2, "high": 3}
DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_PRIORITY = "medium"

EDITABLE_FIELDS = ("keyword", "category", "priority", "max_price", "is_active")


def normalize_keyword(value):
    if value is None:
        raise InvalidArgument("Keyword is required")
    keyword = str(value).strip().lower()
    if not keyword:
        raise InvalidArgument("Keyword is required")
    limit = app_setting("KEYWORD_MAX_LENGTH")
    if len(keyword) > limit:
        raise InvalidArgument(f"Keyword cannot exceed {limit} characters")
    return keyword


def clean_category(value):
    category = (str(value).strip() if value is not None else "") or DEFAULT_CATEGORY
    limit = app_setting("CATEGORY_MAX_LENGTH")
    if len(category) > limit:
        raise InvalidArgument(f"Category cannot exceed {limit} characters")
    return category


def clean_priority(value):
    if value not in PRIORITIES:
        raise InvalidArgument("Priority must be low, medium, or high")
    return value


def clean_max_price(value):
    if value is None or value == "":
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise InvalidArgument("Max price must be a number")
    if not price.is_finite() or price < 0:
        raise InvalidArgument("Max price must be a non-negative number")
    return int(price) if price == price.to_integral_value() else float(price)


def clean_is_active(value):
    if not isinstance(value, bool):
        raise InvalidArgument("is_active must be a boolean")
    return value


CLEANERS = {
    "keyword": normalize_keyword,
    "category": clean_category,
    "priority": clean_priority,
    "max_price": clean_max_price,
    "is_active": clean_is_active,
}


def _ensure_unique(wishlist, keyword, exclude_id=None):
    for item in wishlist:
        if item["keyword"] == keyword and item["id"] != exclude_id:
            raise Conflict("Keyword already in wishlist")


def _find(wishlist, keyword_id):
    for i, item in enumerate(wishlist):
        if item["id"] == keyword_id:
            return i
    raise NotFound("Keyword not found")


def add(user_id, spec):
    """Append a new keyword built from ``spec``; returns the stored keyword."""
    item = {
        "id": uuid.uuid4().hex,
        "keyword": normalize_keyword(spec.get("keyword")),
        "category": clean_category(spec.get("category")),
        "priority": clean_priority(spec.get("priority") or DEFAULT_PRIORITY),
        "max_price": clean_max_price(spec.get("max_price")),
        "is_active": clean_is_active(spec.get("is_active", True)),
        "created_at": timezone.now().isoformat(),
    }

    with locked_user(user_id, ["wishlist"]) as user:
        wishlist = list(user.wishlist)
        _ensure_unique(wishlist, item["keyword"])
        wishlist.append(item)
        user.wishlist = wishlist

    logger.debug("User %s added wishlist keyword %r", user_id, item["keyword"])
    return item


def update(user_id, keyword_id, patch):
    """Apply only the fields present in ``patch``; ``id`` and ``created_at`` never change."""
    changes = {name: CLEANERS[name](patch[name]) for name in EDITABLE_FIELDS if name in patch}

    with locked_user(user_id, ["wishlist"]) as user:
        wishlist = list(user.wishlist)
        i = _find(wishlist, keyword_id)
        if "keyword" in changes:
            _ensure_unique(wishlist, changes["keyword"], exclude_id=keyword_id)
        wishlist[i] = {**wishlist[i], **changes}
        user.wishlist = wishlist

    return wishlist[i]


def remove(user_id, keyword_id):
    with locked_user(user_id, ["wishlist"]) as user:
        wishlist = list(user.wishlist)
        del wishlist[_find(wishlist, keyword_id)]
        user.wishlist = wishlist
    return wishlist


def clear(user_id):
    with locked_user(user_id, ["wishlist"]) as user:
        user.wishlist = []


def list_keywords(user_id):
    return list(load_user(user_id, "wishlist").wishlist)
