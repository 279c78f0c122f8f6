# purchases/serializers.py

from decimal import Decimal

from rest_framework import serializers

from purchases.models import Purchase
from purchases.services.purchase_service import MAX_PURCHASE_QUANTITY


class ProductRefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()


class PurchaseSerializer(serializers.ModelSerializer):
    productId = serializers.UUIDField(source="product_id", read_only=True)
    product = ProductRefSerializer(read_only=True)
    purchasePrice = serializers.DecimalField(source="unit_cost", max_digits=10, decimal_places=2, read_only=True)
    totalCost = serializers.DecimalField(source="total_cost", max_digits=14, decimal_places=2, read_only=True)
    purchaseDate = serializers.DateTimeField(source="purchase_date", read_only=True)
    createdBy = serializers.EmailField(source="created_by.email", read_only=True, default=None)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Purchase
        fields = [
            "id",
            "productId",
            "product",
            "quantity",
            "purchasePrice",
            "totalCost",
            "supplier",
            "notes",
            "purchaseDate",
            "createdBy",
            "createdAt",
        ]
        read_only_fields = fields


class PurchaseCreateSerializer(serializers.Serializer):
    """Input shape for POST /api/admin/purchases/."""

    productId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_PURCHASE_QUANTITY)
    purchasePrice = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    supplier = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")
    purchaseDate = serializers.DateTimeField(required=False, allow_null=True, default=None)


class PurchaseStatsSerializer(serializers.Serializer):
    totalPurchases = serializers.IntegerField(source="total_purchases")
    totalUnits = serializers.IntegerField(source="total_units")
    totalCost = serializers.DecimalField(source="total_cost", max_digits=14, decimal_places=2)
    purchasesToday = serializers.IntegerField(source="purchases_today")
