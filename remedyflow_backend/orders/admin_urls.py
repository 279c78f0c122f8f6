# orders/admin_urls.py

from django.urls import path

from orders.views import (
    AdminOrderDetailView,
    AdminOrderListView,
    AdminOrderStatsView,
    AdminOrderStatusView,
)

urlpatterns = [
    path("orders/", AdminOrderListView.as_view(), name="admin-orders"),
    path("orders/stats/", AdminOrderStatsView.as_view(), name="admin-order-stats"),
    path("orders/<uuid:pk>/", AdminOrderDetailView.as_view(), name="admin-order-detail"),
    path("orders/<uuid:pk>/status/", AdminOrderStatusView.as_view(), name="admin-order-status"),
]
