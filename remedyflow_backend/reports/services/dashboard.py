# reports/services/dashboard.py

from __future__ import annotations

from orders.models import Order
from orders.services.order_service import order_stats
from products.models import Product

RECENT_ORDERS = 5


def dashboard_stats() -> dict:
    """Headline numbers for the admin landing page."""
    stats = order_stats()
    return {
        "total_orders": stats["total_orders"],
        "total_revenue": stats["total_revenue"],
        "pending_orders": stats["pending_orders"],
        "total_products": Product.objects.filter(is_active=True).count(),
        "recent_orders": list(
            Order.objects.select_related("product", "sale").order_by("-created_at")[:RECENT_ORDERS]
        ),
    }
