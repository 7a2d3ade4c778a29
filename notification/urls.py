from django.urls import path
from .views import (
    NotificationListView,
    UnreadCountView,
    MarkReadView,
    MarkAllReadView,
    NotificationDetailView,
    BroadcastView,
)

urlpatterns = [
    path("", NotificationListView.as_view(), name="notification-list"),
    path("unread-count/", UnreadCountView.as_view(), name="notification-unread-count"),
    path("mark-all-read/", MarkAllReadView.as_view(), name="notification-mark-all-read"),
    path("broadcast/", BroadcastView.as_view(), name="notification-broadcast"),
    path("<str:pk>/read/", MarkReadView.as_view(), name="notification-mark-read"),
    path("<str:pk>/", NotificationDetailView.as_view(), name="notification-detail"),
]
