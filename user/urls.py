from django.urls import path
from .views import (
    RegisterView,
    LoginView,
    LogoutView,
    MeView,
    UserProfileView,
    DashboardStatsView,
)

urlpatterns = [
    path("auth/register/", RegisterView.as_view(), name="auth-register"),
    path("auth/login/", LoginView.as_view(), name="auth-login"),
    path("auth/logout/", LogoutView.as_view(), name="auth-logout"),
    path("auth/me/", MeView.as_view(), name="auth-me"),
    path("users/stats/dashboard/", DashboardStatsView.as_view(), name="user-stats"),
    path("users/<int:pk>/", UserProfileView.as_view(), name="user-profile"),
]
