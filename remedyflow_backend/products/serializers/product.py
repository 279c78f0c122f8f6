# products/serializers/product.py

"""
PRODUCT SERIALIZERS

PublicProductSerializer:
- storefront shape, read-only
- exposes availability ("in_stock" / "out_of_stock"), never the number
- NEVER exposes purchasePrice

AdminProductSerializer:
- full CRUD shape for the back office
- read side includes derived stock totals (annotated by products.services.catalog)
"""

from decimal import Decimal

from rest_framework import serializers

from products.models import Category, Product
from products.services.stock import IN_STOCK, OUT_OF_STOCK, stock_of, total_purchased, total_sold


def _current_stock(obj) -> int:
    annotated = getattr(obj, "current_stock", None)
    if annotated is None:
        return stock_of(obj.id)
    return int(annotated)


class CategoryRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]


class PublicProductSerializer(serializers.ModelSerializer):
    category = CategoryRefSerializer(read_only=True)
    categoryId = serializers.UUIDField(source="category_id", read_only=True)
    expiryDate = serializers.DateField(source="expiry_date", read_only=True)
    sellingPrice = serializers.DecimalField(source="selling_price", max_digits=10, decimal_places=2, read_only=True)
    isHot = serializers.BooleanField(source="is_hot", read_only=True)
    isBestSeller = serializers.BooleanField(source="is_best_seller", read_only=True)
    availability = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "categoryId",
            "potency",
            "form",
            "manufacturer",
            "expiryDate",
            "sellingPrice",
            "image",
            "isHot",
            "isBestSeller",
            "availability",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_availability(self, obj) -> str:
        return IN_STOCK if _current_stock(obj) > 0 else OUT_OF_STOCK


class AdminProductSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=2, max_length=200)
    description = serializers.CharField(min_length=10, max_length=5000)
    category = CategoryRefSerializer(read_only=True)
    categoryId = serializers.PrimaryKeyRelatedField(source="category", queryset=Category.objects.all())
    potency = serializers.CharField(min_length=1, max_length=100)
    form = serializers.CharField(min_length=1, max_length=100)
    manufacturer = serializers.CharField(min_length=1, max_length=200)
    batchNumber = serializers.CharField(source="batch_number", max_length=100, required=False, allow_blank=True)
    expiryDate = serializers.DateField(source="expiry_date", required=False, allow_null=True)
    sellingPrice = serializers.DecimalField(
        source="selling_price", max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )
    purchasePrice = serializers.DecimalField(
        source="purchase_price", max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )
    image = serializers.URLField(max_length=500)
    isHot = serializers.BooleanField(source="is_hot", required=False, default=False)
    isBestSeller = serializers.BooleanField(source="is_best_seller", required=False, default=False)
    isActive = serializers.BooleanField(source="is_active", required=False, default=True)

    totalPurchases = serializers.SerializerMethodField()
    totalSales = serializers.SerializerMethodField()
    currentStock = serializers.SerializerMethodField()

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "category",
            "categoryId",
            "potency",
            "form",
            "manufacturer",
            "batchNumber",
            "expiryDate",
            "sellingPrice",
            "purchasePrice",
            "image",
            "isHot",
            "isBestSeller",
            "isActive",
            "totalPurchases",
            "totalSales",
            "currentStock",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "createdAt", "updatedAt"]

    def get_totalPurchases(self, obj) -> int:
        annotated = getattr(obj, "total_purchases", None)
        return total_purchased(obj.id) if annotated is None else int(annotated)

    def get_totalSales(self, obj) -> int:
        annotated = getattr(obj, "total_sales", None)
        return total_sold(obj.id) if annotated is None else int(annotated)

    def get_currentStock(self, obj) -> int:
        return _current_stock(obj)
