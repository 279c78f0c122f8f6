# reports/admin_urls.py

from django.urls import path

from reports.views import DashboardStatsView, ExpiryReportView, StockReportView

urlpatterns = [
    path("reports/stock/", StockReportView.as_view(), name="admin-report-stock"),
    path("reports/expiry/", ExpiryReportView.as_view(), name="admin-report-expiry"),
    path("dashboard/stats/", DashboardStatsView.as_view(), name="admin-dashboard-stats"),
]
