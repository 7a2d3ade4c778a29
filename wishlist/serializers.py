from rest_framework import serializers

from product.serializers import ProductSerializer
from .store import PRIORITIES


class WishlistKeywordSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    keyword = serializers.CharField(max_length=200, trim_whitespace=False)
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    priority = serializers.ChoiceField(choices=PRIORITIES, required=False)
    max_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, coerce_to_string=False
    )
    is_active = serializers.BooleanField(required=False, default=True)
    created_at = serializers.DateTimeField(read_only=True)


class ExportOptionsSerializer(serializers.Serializer):
    """Query string of GET /wishlist/export/. Feed it a plain dict, not a QueryDict."""

    format = serializers.CharField(required=False, default="json")
    keywords = serializers.BooleanField(required=False, default=True)
    categories = serializers.BooleanField(required=False, default=True)
    priorities = serializers.BooleanField(required=False, default=True)
    maxPrices = serializers.BooleanField(required=False, default=True)
    timestamps = serializers.BooleanField(required=False, default=True)
    inactiveItems = serializers.BooleanField(required=False, default=False)


class MatchHistorySerializer(serializers.Serializer):
    id = serializers.CharField()
    message = serializers.CharField()
    product_id = serializers.IntegerField(allow_null=True)
    product = ProductSerializer(allow_null=True)
    is_read = serializers.BooleanField()
    created_at = serializers.DateTimeField()
