# orders/admin.py

from django.contrib import admin

from orders.models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Browse only. Status changes go through the API so that confirmation
    writes its sale and checks stock.
    """

    list_display = ("order_number", "customer_name", "email", "product", "quantity", "total_amount", "status", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("order_number", "customer_name", "email", "phone")
    date_hierarchy = "created_at"
    list_select_related = ("product",)
    readonly_fields = [f.name for f in Order._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
