from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from common.exceptions import InvalidInputError
from common.tests.factories import make_admin, make_order, make_product, stock_up
from orders.models import OrderStatus
from reports.services import dashboard, stock_reports
from sales.models import Sale


class StockReportTests(TestCase):
    def setUp(self):
        self.plenty = make_product(name="Belladonna")
        self.low = make_product(name="Calendula")
        self.empty = make_product(name="Nux Vomica")
        stock_up(self.plenty, 50)
        stock_up(self.low, 10)

    def test_low_stock_is_above_zero_and_at_most_threshold(self):
        rows = stock_reports.low_stock_alerts(threshold=10)
        self.assertEqual([r.product_name for r in rows], ["Calendula"])

        self.assertEqual(stock_reports.low_stock_alerts(threshold=9), [])

    def test_out_of_stock_includes_products_without_history(self):
        rows = stock_reports.out_of_stock_products()
        self.assertEqual([r.product_name for r in rows], ["Nux Vomica"])

    def test_sales_reduce_reported_stock(self):
        Sale.objects.create(product=self.plenty, quantity=45, sale_price="12.50")

        row = next(r for r in stock_reports.stock_report("all") if r.product_id == self.plenty.id)

        self.assertEqual(row.total_purchases, 50)
        self.assertEqual(row.total_sales, 45)
        self.assertEqual(row.current_stock, 5)
        self.assertTrue(row.is_low_stock)

    def test_inactive_products_are_left_out(self):
        self.empty.is_active = False
        self.empty.save()
        self.assertEqual(stock_reports.out_of_stock_products(), [])

    def test_unknown_report_type(self):
        with self.assertRaises(InvalidInputError):
            stock_reports.stock_report("expired")


class ExpiryAlertTests(TestCase):
    def setUp(self):
        self.now = timezone.localtime(timezone.now())

    def _expiring_in(self, days, **extra):
        return make_product(expiry_date=(self.now + timedelta(days=days)).date(), **extra)

    def test_buckets_by_days_left(self):
        critical = self._expiring_in(20)
        warning = self._expiring_in(45)
        notice = self._expiring_in(75)
        self._expiring_in(120)

        alerts = stock_reports.expiry_alerts(90, now=self.now)

        by_id = {a.product_id: a for a in alerts}
        self.assertEqual(len(alerts), 3)
        self.assertEqual(by_id[critical.id].severity, "critical")
        self.assertEqual(by_id[critical.id].days_until_expiry, 20)
        self.assertEqual(by_id[warning.id].severity, "warning")
        self.assertEqual(by_id[notice.id].severity, "notice")

    def test_soonest_first_with_stock(self):
        later = self._expiring_in(60)
        sooner = self._expiring_in(30)
        stock_up(sooner, 7)

        alerts = stock_reports.expiry_alerts(90, now=self.now)

        self.assertEqual([a.product_id for a in alerts], [sooner.id, later.id])
        self.assertEqual(alerts[0].current_stock, 7)
        self.assertEqual(alerts[0].severity, "critical")
        self.assertEqual(alerts[1].severity, "warning")

    def test_excludes_expired_today_undated_and_inactive(self):
        self._expiring_in(-3)
        self._expiring_in(0)
        make_product()
        self._expiring_in(10, is_active=False)

        self.assertEqual(stock_reports.expiry_alerts(90, now=self.now), [])

    def test_window_is_a_parameter(self):
        self._expiring_in(45)
        self.assertEqual(stock_reports.expiry_alerts(30, now=self.now), [])
        self.assertEqual(len(stock_reports.expiry_alerts(60, now=self.now)), 1)

    def test_severity_boundaries(self):
        self.assertEqual(stock_reports.severity_for(30), "critical")
        self.assertEqual(stock_reports.severity_for(31), "warning")
        self.assertEqual(stock_reports.severity_for(60), "warning")
        self.assertEqual(stock_reports.severity_for(61), "notice")


class DashboardTests(TestCase):
    def test_counts_active_products_and_recent_orders(self):
        product = make_product(selling_price="10.00")
        make_product(is_active=False)
        for _ in range(6):
            make_order(product)
        make_order(product, quantity=2, status=OrderStatus.CONFIRMED)

        stats = dashboard.dashboard_stats()

        self.assertEqual(stats["total_products"], 1)
        self.assertEqual(stats["total_orders"], 7)
        self.assertEqual(stats["pending_orders"], 6)
        self.assertEqual(str(stats["total_revenue"]), "20.00")
        self.assertEqual(len(stats["recent_orders"]), 5)


class ReportApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(make_admin())

    def test_stock_report_echoes_type(self):
        stock_up(make_product(), 3)

        resp = self.client.get("/api/admin/reports/stock/", {"type": "low-stock", "threshold": 5})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["reportType"], "low-stock")
        self.assertEqual(len(resp.data["data"]), 1)
        self.assertEqual(resp.data["data"][0]["currentStock"], 3)

    def test_bad_threshold_is_400(self):
        resp = self.client.get("/api/admin/reports/stock/", {"threshold": "ten"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"], "Validation error")

    def test_expiry_report_groups_by_severity(self):
        today = timezone.localdate()
        make_product(expiry_date=today + timedelta(days=20))
        make_product(expiry_date=today + timedelta(days=75))

        resp = self.client.get("/api/admin/reports/expiry/", {"days": 90})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.data["data"]), 2)
        self.assertEqual(len(resp.data["grouped"]["critical"]), 1)
        self.assertEqual(len(resp.data["grouped"]["notice"]), 1)

    def test_dashboard_requires_admin(self):
        resp = APIClient().get("/api/admin/dashboard/stats/")
        self.assertEqual(resp.status_code, 401)

    def test_dashboard(self):
        resp = self.client.get("/api/admin/dashboard/stats/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["data"]["totalOrders"], 0)
        self.assertEqual(resp.data["data"]["recentOrders"], [])
