"""
URL configuration for the campusmart project.

Every API route lives under /api/v1/; the OpenAPI schema and its two
viewers sit next to them.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/", include("user.urls")),
    path("api/v1/", include("product.urls")),
    path("api/v1/wishlist/", include("wishlist.urls")),
    path("api/v1/notifications/", include("notification.urls")),
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),  # OpenAPI JSON/YAML
    path("api/v1/schema/swagger-ui/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/v1/schema/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
