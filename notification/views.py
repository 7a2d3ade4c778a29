from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import feed
from .events import broadcast_system
from .publisher import get_publisher
from .serializers import NotificationSerializer, BroadcastSerializer


def _with_products(entries):
    from product.models import Product

    products = Product.objects.in_bulk({e["product_id"] for e in entries if e.get("product_id")})
    return [{**e, "product": products.get(e.get("product_id"))} for e in entries]


class NotificationListView(APIView):
    """
    GET: the current user's notifications, newest first
    DELETE: clear every notification
    """

    def get(self, request, format=None):
        entries = _with_products(feed.list_entries(request.user.id))
        return Response({"notifications": NotificationSerializer(entries, many=True).data})

    def delete(self, request, format=None):
        feed.clear(request.user.id)
        return Response({"message": "All notifications cleared"}, status=status.HTTP_200_OK)


class UnreadCountView(APIView):
    def get(self, request, format=None):
        return Response({"unread_count": feed.unread_count(request.user.id)})


class MarkReadView(APIView):
    def patch(self, request, pk, format=None):
        feed.mark_read(request.user.id, pk)
        return Response({"message": "Notification marked as read"})


class MarkAllReadView(APIView):
    def patch(self, request, format=None):
        feed.mark_all_read(request.user.id)
        return Response({"message": "All notifications marked as read"})


class NotificationDetailView(APIView):
    def delete(self, request, pk, format=None):
        feed.remove(request.user.id, pk)
        return Response({"message": "Notification deleted"})


class BroadcastView(APIView):
    """
    POST /api/v1/notifications/broadcast/ { "message": ... } -> system message to every user
    """

    permission_classes = [permissions.IsAdminUser]

    def post(self, request, format=None):
        serializer = BroadcastSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delivered = broadcast_system(serializer.validated_data["message"], publisher=get_publisher())
        return Response({"message": "System notification sent", "delivered": delivered})
