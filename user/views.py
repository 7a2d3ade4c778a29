# user/views.py
import logging
from datetime import datetime

from django.contrib.auth import authenticate
from django.db.models import Sum
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from product.models import Product
from .models import User
from .serializers import (
    RegisterSerializer,
    LoginSerializer,
    UserSerializer,
    PublicUserSerializer,
    ProfileSerializer,
)

logger = logging.getLogger(__name__)


def _set_auth_cookies(response, user):
    refresh = RefreshToken.for_user(user)

    response.set_cookie(
        key="access_token",
        value=str(refresh.access_token),
        httponly=True,
        secure=False,     # set True in production (HTTPS)
        samesite="Lax",
        max_age=60 * 60,  # 1 hour
    )
    response.set_cookie(
        key="refresh_token",
        value=str(refresh),
        httponly=True,
        secure=False,     # set True in production (HTTPS)
        samesite="Lax",
        max_age=7 * 24 * 60 * 60,  # 7 days
    )
    return response


class RegisterView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered user %s", user.pk)

        response = Response(
            {"message": "User registered successfully", "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )
        return _set_auth_cookies(response, user)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"].lower()
        password = serializer.validated_data["password"]

        user = authenticate(request, email=email, password=password)
        if user is None:
            return Response(
                {"error": "Unauthorized", "message": "Invalid credentials"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        response = Response(
            {"message": "Login successful", "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )
        return _set_auth_cookies(response, user)


class LogoutView(APIView):
    def post(self, request):
        response = Response({"message": "Logged out"}, status=status.HTTP_200_OK)

        # delete both JWT cookies
        response.delete_cookie("access_token")
        response.delete_cookie("refresh_token")
        return response


class MeView(APIView):
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request):
        serializer = ProfileSerializer(request.user, context={"request": request})
        return Response({"user": serializer.data})

    def put(self, request):
        serializer = ProfileSerializer(request.user, data=request.data, partial=True, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"message": "Profile updated successfully", "user": serializer.data})

    patch = put


class UserProfileView(APIView):
    """
    GET /api/v1/users/<pk>/ -> public profile; never exposes wishlist or notifications.
    """

    def get(self, request, pk):
        user = get_object_or_404(User, pk=pk, is_active=True)
        return Response({"user": PublicUserSerializer(user, context={"request": request}).data})


def _month_bounds(today):
    start = datetime(today.year, today.month, 1, tzinfo=today.tzinfo)
    if today.month == 1:
        prev_start = start.replace(year=today.year - 1, month=12)
    else:
        prev_start = start.replace(month=today.month - 1)
    return prev_start, start


class DashboardStatsView(APIView):
    """
    GET /api/v1/users/stats/dashboard/ -> seller statistics for the current user.
    """

    def get(self, request):
        mine = Product.objects.filter(seller=request.user)
        sold = mine.filter(is_available=False, sold_at__isnull=False)

        prev_start, this_start = _month_bounds(timezone.now())
        last_month = mine.filter(created_at__gte=prev_start, created_at__lt=this_start).count()
        this_month = mine.filter(created_at__gte=this_start).count()
        if last_month > 0:
            products_change = round((this_month - last_month) / last_month * 100)
        else:
            products_change = 100 if this_month > 0 else 0

        stats = {
            "total_products": mine.count(),
            "active_products": mine.filter(is_available=True).count(),
            "sold_products": sold.count(),
            "total_views": mine.aggregate(total=Sum("views"))["total"] or 0,
            "total_earnings": sold.aggregate(total=Sum("price"))["total"] or 0,
            "products_change": products_change,
        }
        return Response({"stats": stats})
