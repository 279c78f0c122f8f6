# reports/serializers.py

from rest_framework import serializers

from orders.serializers import OrderSerializer


class StockInfoSerializer(serializers.Serializer):
    productId = serializers.UUIDField(source="product_id")
    productName = serializers.CharField(source="product_name")
    totalPurchases = serializers.IntegerField(source="total_purchases")
    totalSales = serializers.IntegerField(source="total_sales")
    currentStock = serializers.IntegerField(source="current_stock")
    isLowStock = serializers.BooleanField(source="is_low_stock")
    isOutOfStock = serializers.BooleanField(source="is_out_of_stock")


class ExpiryAlertSerializer(serializers.Serializer):
    productId = serializers.UUIDField(source="product_id")
    productName = serializers.CharField(source="product_name")
    expiryDate = serializers.DateField(source="expiry_date")
    daysUntilExpiry = serializers.IntegerField(source="days_until_expiry")
    currentStock = serializers.IntegerField(source="current_stock")
    severity = serializers.CharField()


class DashboardStatsSerializer(serializers.Serializer):
    totalOrders = serializers.IntegerField(source="total_orders")
    totalRevenue = serializers.DecimalField(source="total_revenue", max_digits=14, decimal_places=2)
    totalProducts = serializers.IntegerField(source="total_products")
    pendingOrders = serializers.IntegerField(source="pending_orders")
    recentOrders = OrderSerializer(source="recent_orders", many=True)
