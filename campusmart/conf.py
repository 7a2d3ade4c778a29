from django.conf import settings

DEFAULTS = {
    "NOTIFICATION_LIMIT": 50,
    "KEYWORD_MAX_LENGTH": 50,
    "CATEGORY_MAX_LENGTH": 30,
    "CURRENCY_SYMBOL": "₹",
    "NOTIFICATION_PUBLISHER": None,
    "IMAGE_STORE": "product.images.DefaultStorageImageStore",
    "WISHLIST_MATCH_ASYNC": False,
    "WISHLIST_MATCH_WORKERS": 2,
    "MAX_PRODUCT_IMAGES": 5,
    "MAX_IMAGE_SIZE": 5 * 1024 * 1024,
}


def app_setting(name):
    """Read one key of settings.CAMPUSMART, falling back to DEFAULTS."""
    return getattr(settings, "CAMPUSMART", {}).get(name, DEFAULTS[name])
