# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules:
- Stock is derived, so it is shown read-only and never edited here.
- Products are soft deleted; the delete action is disabled because
  purchases, sales and orders keep a protected FK to the product.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Category, Product
from products.services.stock import stock_of


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "potency",
        "selling_price",
        "expiry_date",
        "current_stock",
        "is_active",
    )
    list_filter = ("is_active", "is_hot", "is_best_seller", "category")
    search_fields = ("name", "manufacturer", "batch_number")
    readonly_fields = ("current_stock", "created_at", "updated_at")

    @admin.display(description="Stock")
    def current_stock(self, obj):
        if obj is None or obj.pk is None:
            return 0
        return stock_of(obj.pk)

    def has_delete_permission(self, request, obj=None):
        return False
