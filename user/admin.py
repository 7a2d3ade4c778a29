# user/admin.py
from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "email", "name", "college", "year", "is_active", "is_staff", "date_joined")
    list_filter = ("year", "is_active", "is_staff")
    search_fields = ("email", "name", "college")
    readonly_fields = ("wishlist", "notifications", "date_joined", "last_login")
    exclude = ("password", "groups", "user_permissions")
