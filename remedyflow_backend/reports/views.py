# reports/views.py

"""
ADMIN REPORT ENDPOINTS

- GET /api/admin/reports/stock/?type=all|low-stock|out-of-stock&threshold=N
- GET /api/admin/reports/expiry/?days=N
- GET /api/admin/dashboard/stats/

Defaults come from settings (LOW_STOCK_THRESHOLD, EXPIRY_WINDOW_DAYS).
"""

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from common.coercion import query_int
from common.responses import success_response
from permissions.roles import IsAdmin
from reports.serializers import DashboardStatsSerializer, ExpiryAlertSerializer, StockInfoSerializer
from reports.services import dashboard, stock_reports

MAX_THRESHOLD = 100_000
MAX_EXPIRY_WINDOW_DAYS = 3650


class StockReportView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = StockInfoSerializer

    @extend_schema(
        tags=["admin: reports"],
        parameters=[
            OpenApiParameter("type", str, required=False, enum=list(stock_reports.REPORT_TYPES)),
            OpenApiParameter("threshold", int, required=False),
        ],
        responses=StockInfoSerializer(many=True),
    )
    def get(self, request):
        report_type = (request.query_params.get("type") or stock_reports.REPORT_ALL).strip().lower()
        threshold = query_int(
            request.query_params.get("threshold"),
            field_name="threshold",
            default=settings.LOW_STOCK_THRESHOLD,
            minimum=0,
            maximum=MAX_THRESHOLD,
        )

        rows = stock_reports.stock_report(report_type, threshold)

        return success_response(
            StockInfoSerializer(rows, many=True).data,
            reportType=report_type,
            threshold=threshold,
        )


class ExpiryReportView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = ExpiryAlertSerializer

    @extend_schema(
        tags=["admin: reports"],
        parameters=[OpenApiParameter("days", int, required=False)],
        responses=ExpiryAlertSerializer(many=True),
    )
    def get(self, request):
        days = query_int(
            request.query_params.get("days"),
            field_name="days",
            default=settings.EXPIRY_WINDOW_DAYS,
            minimum=1,
            maximum=MAX_EXPIRY_WINDOW_DAYS,
        )

        alerts = stock_reports.expiry_alerts(days)
        grouped = stock_reports.group_by_severity(alerts)

        return success_response(
            ExpiryAlertSerializer(alerts, many=True).data,
            grouped={level: ExpiryAlertSerializer(items, many=True).data for level, items in grouped.items()},
            days=days,
        )


class DashboardStatsView(GenericAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = DashboardStatsSerializer

    @extend_schema(tags=["admin: reports"], responses=DashboardStatsSerializer)
    def get(self, request):
        return success_response(DashboardStatsSerializer(dashboard.dashboard_stats()).data)
