# sales/admin.py

from django.contrib import admin

from sales.models import Sale


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    """Read-only ledger view; sales come from the API or order confirmation."""

    list_display = ("product", "quantity", "sale_price", "order", "sale_date", "created_by")
    list_filter = ("sale_date",)
    search_fields = ("product__name", "order__order_number", "notes")
    date_hierarchy = "sale_date"
    list_select_related = ("product", "order", "created_by")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
