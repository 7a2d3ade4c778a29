# product/admin.py
from django.contrib import admin
from .models import Product, ProductInterest


class ProductInterestInline(admin.TabularInline):
    model = ProductInterest
    extra = 0
    readonly_fields = ("contacted_at",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "category", "condition", "price", "seller", "is_available", "views", "created_at")
    list_filter = ("category", "condition", "is_available")
    search_fields = ("title", "description", "seller__email")
    inlines = [ProductInterestInline]


@admin.register(ProductInterest)
class ProductInterestAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "user", "contacted_at")
    search_fields = ("product__title", "user__email")
