from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from product.models import Product
from .matching import dispatch_wishlist_matches


@receiver(post_save, sender=Product)
def match_new_product(sender, instance, created, **kwargs):
    # only new listings; the matcher sees the row after the creating transaction commits
    if created and instance.is_available:
        product_id = instance.pk
        transaction.on_commit(lambda: dispatch_wishlist_matches(product_id))
