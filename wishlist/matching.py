"""
Keyword matcher.

When a product is listed, every other user's active wishlist keywords are
checked against it and each matching user gets one ``wishlist_match``
notification (and, if they opted in, an email).
"""
import json
import logging
from collections import Counter, namedtuple
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from functools import reduce
from operator import or_

from django.db import close_old_connections
from django.db.models import Q

from campusmart.conf import app_setting
from notification.email import send_wishlist_email
from notification.events import notify_wishlist_match
from notification.publisher import get_publisher
from product.models import Product
from user.models import User
from .store import PRIORITY_RANK

logger = logging.getLogger(__name__)

WishlistMatch = namedtuple("WishlistMatch", "user_id keyword")

MATCHES_LIMIT = 20
RECOMMENDED_KEYWORDS = [
    "laptop", "textbook", "phone", "tablet", "headphones",
    "calculator", "bicycle", "furniture", "gaming", "camera",
]

_executor = None


def _haystack(product):
    return [product.title.lower(), product.category.lower()] + [str(t).lower() for t in product.tags or []]


def keyword_matches(keyword, haystack, price):
    if not keyword.get("is_active", True):
        return False
    text = keyword["keyword"].lower()
    if not any(text in field for field in haystack):
        return False
    max_price = keyword.get("max_price")
    if max_price is not None and Decimal(price) > Decimal(str(max_price)):
        return False
    return True


def find_matches(product, candidates):
    """
    ``candidates`` is an iterable of ``(user_id, wishlist)`` pairs. Returns one
    WishlistMatch per matching user, carrying the highest-priority keyword
    that matched (first stored wins on a tie).
    """
    haystack = _haystack(product)
    matches = []
    for user_id, wishlist in candidates:
        best = None
        for keyword in wishlist or []:
            if not keyword_matches(keyword, haystack, product.price):
                continue
            if best is None or PRIORITY_RANK[keyword["priority"]] > PRIORITY_RANK[best["priority"]]:
                best = keyword
        if best is not None:
            matches.append(WishlistMatch(user_id, best))
    return matches


def notify_wishlist_matches(product, publisher=None):
    candidates = (
        User.objects.filter(is_active=True)
        .exclude(pk=product.seller_id)
        .only("id", "wishlist")
        .iterator()
    )
    matches = find_matches(product, ((u.pk, u.wishlist) for u in candidates if u.wishlist))

    delivered = []
    for match in matches:
        try:
            notify_wishlist_match(match.user_id, product, publisher=publisher)
        except Exception:
            logger.exception("Wishlist match notification to user %s for product %s failed",
                             match.user_id, product.pk)
            continue
        delivered.append(match)

        try:
            user = User.objects.only("id", "name", "email", "email_notifications").filter(pk=match.user_id).first()
            if user is not None:
                send_wishlist_email(user, product, match.keyword)
        except Exception:
            logger.exception("Wishlist match email to user %s for product %s failed",
                             match.user_id, product.pk)

    logger.info("Product %s matched %s wishlists", product.pk, len(delivered))
    return delivered


def run_wishlist_matches(product_id):
    try:
        product = Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        logger.warning("Product %s vanished before wishlist matching", product_id)
        return []

    try:
        return notify_wishlist_matches(product, publisher=get_publisher())
    except Exception:
        logger.exception("Wishlist matching for product %s failed", product_id)
        return []


def _run_in_worker(product_id):
    # worker threads get their own connection; drop it when done
    close_old_connections()
    try:
        return run_wishlist_matches(product_id)
    finally:
        close_old_connections()


def _get_executor():
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(
            max_workers=app_setting("WISHLIST_MATCH_WORKERS"),
            thread_name_prefix="wishlist-match",
        )
    return _executor


def dispatch_wishlist_matches(product_id):
    """Run matching for a newly listed product, in the background when configured."""
    if app_setting("WISHLIST_MATCH_ASYNC"):
        return _get_executor().submit(_run_in_worker, product_id)
    return run_wishlist_matches(product_id)


def _keyword_prefilter(keyword):
    text = keyword["keyword"]
    # JSON columns may keep non-ASCII tags \u-escaped, so look for both spellings
    escaped = json.dumps(text)[1:-1]
    condition = Q(title__icontains=text) | Q(category__icontains=text) | Q(tags__icontains=text)
    if escaped != text:
        condition |= Q(tags__icontains=escaped)
    return condition


def matching_products(user):
    """Available products listed by others that match the user's active keywords, newest first."""
    keywords = [k for k in user.wishlist if k.get("is_active", True)]
    if not keywords:
        return []

    prefilter = reduce(or_, (_keyword_prefilter(k) for k in keywords))
    queryset = (
        Product.objects.filter(prefilter, is_available=True)
        .exclude(seller=user)
        .select_related("seller")
        .order_by("-created_at", "-id")
    )

    found = []
    for product in queryset.iterator():
        haystack = _haystack(product)
        if any(keyword_matches(k, haystack, product.price) for k in keywords):
            found.append(product)
            if len(found) == MATCHES_LIMIT:
                break
    return found


def suggestions():
    categories = list(
        Product.objects.order_by("category").values_list("category", flat=True).distinct()[:10]
    )
    tag_counts = Counter()
    for tags in Product.objects.values_list("tags", flat=True).iterator():
        tag_counts.update(str(t) for t in tags or [])
    return {
        "categories": categories,
        "popular_tags": [tag for tag, _ in tag_counts.most_common(20)],
        "recommended": list(RECOMMENDED_KEYWORDS),
    }
