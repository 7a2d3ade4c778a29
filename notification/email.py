import logging

from django.conf import settings
from django.core.mail import send_mail

from campusmart.money import display_price

logger = logging.getLogger(__name__)


def send_wishlist_email(user, product, keyword):
    """Mail a wishlist match to users who opted in. Returns True when a mail went out."""
    if not user.email_notifications or not user.email:
        return False

    subject = "Wishlist Match Found - CampusMart"
    link = f"{settings.FRONTEND_URL.rstrip('/')}/products/{product.pk}"
    body = (
        f"Hi {user.name},\n\n"
        f'A product matching your wishlist keyword "{keyword["keyword"]}" is now available:\n\n'
        f"{product.title} - {display_price(product.price)}\n"
        f"{link}\n\n"
        "Be quick, good deals on campus go fast!\n"
        "- CampusMart"
    )

    try:
        sent = send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [user.email], fail_silently=False)
    except Exception:
        logger.exception("Wishlist email to user %s failed", user.pk)
        return False
    if sent < 1:
        logger.error("send_mail returned 0 while sending wishlist email to user %s", user.pk)
        return False
    return True
