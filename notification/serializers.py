from rest_framework import serializers

from .feed import NOTIFICATION_TYPES


class ProductRefSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    title = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    images = serializers.ListField(child=serializers.DictField())
    is_available = serializers.BooleanField()


class NotificationSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = serializers.ChoiceField(choices=NOTIFICATION_TYPES)
    message = serializers.CharField()
    product_id = serializers.IntegerField(allow_null=True)
    # None when the product was deleted after the notification was sent
    product = ProductRefSerializer(allow_null=True, required=False)
    is_read = serializers.BooleanField()
    created_at = serializers.DateTimeField()


class BroadcastSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=500)
