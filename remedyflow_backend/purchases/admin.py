# purchases/admin.py

from django.contrib import admin

from purchases.models import Purchase


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """Read-only ledger view; purchases are recorded through the API."""

    list_display = ("product", "quantity", "unit_cost", "supplier", "purchase_date", "created_by")
    list_filter = ("purchase_date",)
    search_fields = ("product__name", "supplier")
    date_hierarchy = "purchase_date"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
