# sales/serializers.py

from decimal import Decimal

from rest_framework import serializers

from sales.models import Sale
from sales.services.sale_service import MAX_SALE_QUANTITY


class ProductRefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()


class SaleSerializer(serializers.ModelSerializer):
    productId = serializers.UUIDField(source="product_id", read_only=True)
    product = ProductRefSerializer(read_only=True)
    salePrice = serializers.DecimalField(source="sale_price", max_digits=10, decimal_places=2, read_only=True)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=14, decimal_places=2, read_only=True)
    orderId = serializers.UUIDField(source="order_id", read_only=True, allow_null=True)
    orderNumber = serializers.CharField(source="order.order_number", read_only=True, default=None)
    saleDate = serializers.DateTimeField(source="sale_date", read_only=True)
    createdBy = serializers.EmailField(source="created_by.email", read_only=True, default=None)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Sale
        fields = [
            "id",
            "productId",
            "product",
            "quantity",
            "salePrice",
            "totalAmount",
            "orderId",
            "orderNumber",
            "notes",
            "saleDate",
            "createdBy",
            "createdAt",
        ]
        read_only_fields = fields


class SaleCreateSerializer(serializers.Serializer):
    """Input shape for POST /api/admin/sales/ (manual sale)."""

    productId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_SALE_QUANTITY)
    salePrice = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")
    saleDate = serializers.DateTimeField(required=False, allow_null=True, default=None)


class SaleStatsSerializer(serializers.Serializer):
    totalSales = serializers.IntegerField(source="total_sales")
    totalUnits = serializers.IntegerField(source="total_units")
    totalRevenue = serializers.DecimalField(source="total_revenue", max_digits=14, decimal_places=2)
    salesToday = serializers.IntegerField(source="sales_today")
    orderSales = serializers.IntegerField(source="order_sales")
