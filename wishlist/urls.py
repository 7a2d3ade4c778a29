from django.urls import path
from .views import (
    WishlistListView,
    WishlistAddView,
    WishlistUpdateView,
    WishlistRemoveView,
    WishlistClearView,
    WishlistExportView,
    WishlistMatchesView,
    WishlistSuggestionsView,
    WishlistHistoryView,
)

urlpatterns = [
    path("", WishlistListView.as_view(), name="wishlist-list"),
    path("add/", WishlistAddView.as_view(), name="wishlist-add"),
    path("update/<str:pk>/", WishlistUpdateView.as_view(), name="wishlist-update"),
    path("remove/<str:pk>/", WishlistRemoveView.as_view(), name="wishlist-remove"),
    path("clear/", WishlistClearView.as_view(), name="wishlist-clear"),
    path("export/", WishlistExportView.as_view(), name="wishlist-export"),
    path("matches/", WishlistMatchesView.as_view(), name="wishlist-matches"),
    path("suggestions/", WishlistSuggestionsView.as_view(), name="wishlist-suggestions"),
    path("history/", WishlistHistoryView.as_view(), name="wishlist-history"),
]
