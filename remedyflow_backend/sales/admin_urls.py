# sales/admin_urls.py

from django.urls import path

from sales.views import SaleDetailView, SaleListCreateView, SaleStatsView

urlpatterns = [
    path("sales/", SaleListCreateView.as_view(), name="admin-sales"),
    path("sales/stats/", SaleStatsView.as_view(), name="admin-sale-stats"),
    path("sales/<uuid:pk>/", SaleDetailView.as_view(), name="admin-sale-detail"),
]
