from django.http import HttpResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from notification.events import match_history
from product.serializers import ProductSerializer
from user.aggregate import load_user
from . import store
from .export import export_wishlist
from .matching import matching_products, suggestions
from .serializers import WishlistKeywordSerializer, ExportOptionsSerializer, MatchHistorySerializer


class WishlistListView(APIView):
    """
    GET /api/v1/wishlist/ -> the current user's keywords in stored order
    """

    def get(self, request, format=None):
        keywords = store.list_keywords(request.user.id)
        return Response({"wishlist": WishlistKeywordSerializer(keywords, many=True).data})


class WishlistAddView(APIView):
    """
    POST /api/v1/wishlist/add/ { "keyword", "category"?, "priority"?, "max_price"?, "is_active"? }
    """

    def post(self, request, format=None):
        serializer = WishlistKeywordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = store.add(request.user.id, serializer.validated_data)
        return Response(
            {"message": "Keyword added to wishlist", "item": WishlistKeywordSerializer(item).data},
            status=status.HTTP_201_CREATED,
        )


class WishlistUpdateView(APIView):
    def put(self, request, pk, format=None):
        serializer = WishlistKeywordSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        item = store.update(request.user.id, pk, serializer.validated_data)
        return Response({"message": "Wishlist item updated", "item": WishlistKeywordSerializer(item).data})


class WishlistRemoveView(APIView):
    def delete(self, request, pk, format=None):
        remaining = store.remove(request.user.id, pk)
        return Response({
            "message": "Keyword removed from wishlist",
            "wishlist": WishlistKeywordSerializer(remaining, many=True).data,
        })


class WishlistClearView(APIView):
    def delete(self, request, format=None):
        store.clear(request.user.id)
        return Response({"message": "Wishlist cleared"})


class WishlistExportView(APIView):
    """
    GET /api/v1/wishlist/export/?format=json|csv|txt&keywords=&categories=&priorities=
        &maxPrices=&timestamps=&inactiveItems=

    Answers with a file download, not a JSON envelope.
    """

    def get(self, request, format=None):
        params = ExportOptionsSerializer(data=request.query_params.dict())
        params.is_valid(raise_exception=True)
        options = dict(params.validated_data)
        fmt = options.pop("format")

        user = load_user(request.user.id, "name", "email", "wishlist")
        result = export_wishlist(user, fmt, options)

        response = HttpResponse(result.content, content_type=f"{result.content_type}; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{result.filename}"'
        return response


class WishlistMatchesView(APIView):
    def get(self, request, format=None):
        user = load_user(request.user.id, "wishlist")
        products = matching_products(user)
        return Response({"matches": ProductSerializer(products, many=True).data})


class WishlistSuggestionsView(APIView):
    def get(self, request, format=None):
        return Response({"suggestions": suggestions()})


class WishlistHistoryView(APIView):
    def get(self, request, format=None):
        history = match_history(request.user.id)
        return Response({"match_history": MatchHistorySerializer(history, many=True).data})
