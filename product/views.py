import logging

from django.db.models import F
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, permissions, status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.response import Response

from campusmart.exceptions import InvalidArgument
from notification.events import notify_product_interest, notify_product_sold
from notification.publisher import get_publisher
from .filters import ProductFilter, SORT_ORDERINGS
from .images import get_image_store, delete_images
from .models import Product, ProductInterest
from .permissions import IsSellerOrReadOnly
from .serializers import (
    ProductSerializer,
    OwnerProductSerializer,
    InterestedUserSerializer,
    MarkSoldSerializer,
)

logger = logging.getLogger(__name__)


class ProductPagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        page = self.page
        return Response({
            "products": data,
            "pagination": {
                "current_page": page.number,
                "total_pages": page.paginator.num_pages,
                "total_products": page.paginator.count,
                "has_next": page.has_next(),
                "has_prev": page.has_previous(),
            },
        })


class ProductViewSet(viewsets.ModelViewSet):
    """
    Listings: public browse, owner-only edits, sold/available toggle and
    interest tracking. Creating a listing fires the wishlist matcher from a
    post_save signal (see wishlist/signals.py).
    """

    serializer_class = ProductSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsSellerOrReadOnly]
    parser_classes = (MultiPartParser, FormParser, JSONParser)
    pagination_class = ProductPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter

    def get_queryset(self):
        qs = Product.objects.select_related("seller")
        if self.action == "list":
            qs = qs.filter(is_available=True)
            ordering = SORT_ORDERINGS.get(self.request.query_params.get("sort"), SORT_ORDERINGS["newest"])
            qs = qs.order_by(*ordering)
        elif self.action == "my_products":
            qs = qs.filter(seller=self.request.user).prefetch_related("interests__user")
        return qs

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["image_store"] = get_image_store()
        return context

    def perform_create(self, serializer):
        product = serializer.save(seller=self.request.user)
        logger.info("Product %s created by user %s", product.pk, self.request.user.pk)

    def retrieve(self, request, *args, **kwargs):
        product = self.get_object()
        viewer = request.user
        if viewer.is_authenticated and viewer.id != product.seller_id:
            Product.objects.filter(pk=product.pk).update(views=F("views") + 1)
            product.refresh_from_db(fields=["views"])
        serializer_class = OwnerProductSerializer if viewer.id == product.seller_id else ProductSerializer
        return Response({"product": serializer_class(product, context=self.get_serializer_context()).data})

    def create(self, request, *args, **kwargs):
        response = super().create(request, *args, **kwargs)
        response.data = {"message": "Product created successfully", "product": response.data}
        return response

    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        response = super().update(request, *args, **kwargs)
        response.data = {"message": "Product updated successfully", "product": response.data}
        return response

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        delete_images(product.images)
        product.delete()
        return Response({"message": "Product deleted successfully"}, status=status.HTTP_200_OK)

    @action(detail=True, methods=["patch"])
    def sold(self, request, pk=None):
        product = self.get_object()
        payload = MarkSoldSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        product.is_available = False
        product.sold_at = timezone.now()
        buyer = payload.validated_data.get("buyer_id")
        if buyer is not None:
            product.sold_to = buyer
        product.save(update_fields=["is_available", "sold_at", "sold_to", "updated_at"])

        try:
            notify_product_sold(product.seller_id, product, publisher=get_publisher())
        except Exception:
            logger.exception("Sold notification failed for product %s", product.pk)

        return Response({"message": "Product marked as sold", "product": self.get_serializer(product).data})

    @action(detail=True, methods=["patch"])
    def available(self, request, pk=None):
        product = self.get_object()
        product.is_available = True
        product.sold_at = None
        product.sold_to = None
        product.save(update_fields=["is_available", "sold_at", "sold_to", "updated_at"])
        return Response({"message": "Product marked as available", "product": self.get_serializer(product).data})

    @action(detail=True, methods=["post"], permission_classes=[permissions.IsAuthenticated])
    def interest(self, request, pk=None):
        product = self.get_object()
        if product.seller_id == request.user.id:
            raise InvalidArgument("Cannot express interest in your own product")

        _, created = ProductInterest.objects.get_or_create(product=product, user=request.user)
        if not created:
            raise InvalidArgument("Interest already expressed")

        try:
            notify_product_interest(product.seller_id, product, publisher=get_publisher())
        except Exception:
            logger.exception("Interest notification failed for product %s", product.pk)

        return Response({"message": "Interest expressed successfully"}, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], permission_classes=[permissions.IsAuthenticated])
    def interested(self, request, pk=None):
        product = self.get_object()
        if product.seller_id != request.user.id:
            raise PermissionDenied("Access denied")
        qs = product.interests.select_related("user")
        return Response({"interested_users": InterestedUserSerializer(qs, many=True).data})

    @action(detail=False, methods=["get"], url_path="my-products", permission_classes=[permissions.IsAuthenticated])
    def my_products(self, request):
        qs = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(qs)
        serializer = OwnerProductSerializer(page, many=True, context=self.get_serializer_context())
        return self.get_paginated_response(serializer.data)
