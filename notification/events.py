"""
System-triggered notifications.

Users never create entries directly; each event below builds the message
for one kind of entry and appends it to the target user's feed.
"""
import logging

from campusmart.money import display_price
from user.models import User
from . import feed

logger = logging.getLogger(__name__)


def notify_wishlist_match(user_id, product, publisher=None):
    message = (
        "Great news! A product matching your wishlist is now available: "
        f'"{product.title}" for {display_price(product.price)}'
    )
    return feed.append(user_id, feed.WISHLIST_MATCH, message, product_id=product.pk, publisher=publisher)


def notify_product_sold(seller_id, product, publisher=None):
    message = f'Congratulations! Your product "{product.title}" has been sold for {display_price(product.price)}'
    return feed.append(seller_id, feed.PRODUCT_SOLD, message, product_id=product.pk, publisher=publisher)


def notify_product_interest(seller_id, product, publisher=None):
    message = f'Someone is interested in your product "{product.title}". Check your messages for details!'
    return feed.append(seller_id, feed.PRODUCT_INTEREST, message, product_id=product.pk, publisher=publisher)


def notify_system(user_id, message, publisher=None):
    return feed.append(user_id, feed.SYSTEM, message, publisher=publisher)


def broadcast_system(message, publisher=None):
    """Send a system message to every user; one failing user does not stop the rest."""
    delivered = 0
    for user_id in User.objects.values_list("id", flat=True).iterator():
        try:
            notify_system(user_id, message, publisher=publisher)
        except Exception:
            logger.exception("System notification to user %s failed", user_id)
        else:
            delivered += 1
    logger.info("System notification sent to %s users", delivered)
    return delivered


def match_history(user_id):
    """Wishlist-match entries, newest first, with the product attached when it still exists."""
    from product.models import Product

    matches = [e for e in feed.list_entries(user_id) if e["type"] == feed.WISHLIST_MATCH]
    products = Product.objects.select_related("seller").in_bulk(
        {e["product_id"] for e in matches if e.get("product_id")}
    )
    return [{**e, "product": products.get(e.get("product_id"))} for e in matches]
