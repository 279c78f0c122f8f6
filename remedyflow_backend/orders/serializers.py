# orders/serializers.py

from rest_framework import serializers

from orders.models import Order, OrderStatus
from orders.services.order_service import MAX_ORDER_QUANTITY


class OrderProductSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    image = serializers.CharField()
    sellingPrice = serializers.DecimalField(source="selling_price", max_digits=10, decimal_places=2)


class OrderCreateSerializer(serializers.Serializer):
    """Public checkout payload (POST /api/orders/)."""

    customerName = serializers.CharField(min_length=2, max_length=200)
    email = serializers.EmailField()
    phone = serializers.CharField(min_length=10, max_length=20)
    province = serializers.CharField(min_length=2, max_length=100)
    city = serializers.CharField(min_length=2, max_length=100)
    area = serializers.CharField(min_length=2, max_length=100)
    address = serializers.CharField(min_length=10, max_length=1000)
    productId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_ORDER_QUANTITY)
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")


class OrderSerializer(serializers.ModelSerializer):
    orderNumber = serializers.CharField(source="order_number", read_only=True)
    customerName = serializers.CharField(source="customer_name", read_only=True)
    productId = serializers.UUIDField(source="product_id", read_only=True)
    product = OrderProductSerializer(read_only=True)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=12, decimal_places=2, read_only=True)
    saleId = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "customerName",
            "email",
            "phone",
            "province",
            "city",
            "area",
            "address",
            "productId",
            "product",
            "quantity",
            "totalAmount",
            "status",
            "notes",
            "saleId",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_saleId(self, obj):
        sale = getattr(obj, "sale", None)
        return str(sale.id) if sale is not None else None


class PublicOrderSerializer(serializers.ModelSerializer):
    """What the customer gets back after checkout."""

    orderNumber = serializers.CharField(source="order_number", read_only=True)
    customerName = serializers.CharField(source="customer_name", read_only=True)
    productId = serializers.UUIDField(source="product_id", read_only=True)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=12, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "customerName",
            "email",
            "productId",
            "quantity",
            "totalAmount",
            "status",
            "createdAt",
        ]
        read_only_fields = fields


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=16)

    def validate_status(self, value: str) -> str:
        status = value.strip().upper()
        if status not in OrderStatus.values:
            raise serializers.ValidationError(f"status must be one of: {', '.join(OrderStatus.values)}")
        return status


class OrderStatsSerializer(serializers.Serializer):
    totalOrders = serializers.IntegerField(source="total_orders")
    pendingOrders = serializers.IntegerField(source="pending_orders")
    confirmedOrders = serializers.IntegerField(source="confirmed_orders")
    shippedOrders = serializers.IntegerField(source="shipped_orders")
    deliveredOrders = serializers.IntegerField(source="delivered_orders")
    cancelledOrders = serializers.IntegerField(source="cancelled_orders")
    totalRevenue = serializers.DecimalField(source="total_revenue", max_digits=14, decimal_places=2)
