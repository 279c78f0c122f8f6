# purchases/admin_urls.py

from django.urls import path

from purchases.views import PurchaseDetailView, PurchaseListCreateView, PurchaseStatsView

urlpatterns = [
    path("purchases/", PurchaseListCreateView.as_view(), name="admin-purchases"),
    path("purchases/stats/", PurchaseStatsView.as_view(), name="admin-purchase-stats"),
    path("purchases/<uuid:pk>/", PurchaseDetailView.as_view(), name="admin-purchase-detail"),
]
