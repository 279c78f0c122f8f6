from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient

from common.tests.factories import make_admin, make_customer, make_order, make_product, stock_up
from orders.models import Order, OrderStatus
from sales.models import Sale


def _checkout_payload(product, **overrides):
    payload = {
        "customerName": "Jane Doe",
        "email": "jane@example.com",
        "phone": "0712345678",
        "province": "Western",
        "city": "Colombo",
        "area": "Kollupitiya",
        "address": "12 Galle Road, Colombo 03",
        "productId": str(product.id),
        "quantity": 2,
    }
    payload.update(overrides)
    return payload


class PublicOrderApiTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.product = make_product(selling_price="12.50")

    def test_place_order_without_auth(self):
        resp = self.client.post("/api/orders/", _checkout_payload(self.product), format="json")

        self.assertEqual(resp.status_code, 201)
        self.assertTrue(resp.data["success"])
        self.assertEqual(resp.data["message"], "Order placed successfully")
        self.assertEqual(resp.data["data"]["status"], "PENDING")
        self.assertEqual(resp.data["data"]["totalAmount"], "25.00")
        self.assertEqual(Order.objects.count(), 1)

    def test_validation_errors_use_failure_envelope(self):
        resp = self.client.post(
            "/api/orders/",
            _checkout_payload(self.product, phone="123", quantity=0),
            format="json",
        )

        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.data["success"])
        self.assertEqual(resp.data["error"], "Validation error")
        self.assertIn("details", resp.data)

    def test_inactive_product_is_404(self):
        self.product.is_active = False
        self.product.save()

        resp = self.client.post("/api/orders/", _checkout_payload(self.product), format="json")

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data["error"], "Not found")

    def test_public_write_is_throttled(self):
        for _ in range(10):
            self.client.post("/api/orders/", {}, format="json")

        resp = self.client.post("/api/orders/", _checkout_payload(self.product), format="json")

        self.assertEqual(resp.status_code, 429)
        self.assertFalse(resp.data["success"])
        self.assertEqual(resp.data["error"], "Too many requests")


class AdminOrderApiTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = make_admin()
        self.client.force_authenticate(self.admin)
        self.product = make_product(selling_price="10.00")

    def test_admin_endpoints_require_authentication(self):
        anon = APIClient()
        resp = anon.get("/api/admin/orders/")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.data["error"], "Unauthorized")

    def test_customer_is_forbidden(self):
        other = APIClient()
        other.force_authenticate(make_customer())
        resp = other.get("/api/admin/orders/")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.data["error"], "Forbidden")

    def test_list_is_paginated_and_filterable(self):
        make_order(self.product, email="a@example.com")
        make_order(self.product, email="b@example.com", status=OrderStatus.CANCELLED)

        resp = self.client.get("/api/admin/orders/", {"status": "CANCELLED"})

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["pagination"]["total"], 1)
        self.assertEqual(resp.data["data"][0]["email"], "b@example.com")

        resp = self.client.get("/api/admin/orders/", {"email": "A@EXAMPLE"})
        self.assertEqual(resp.data["pagination"]["total"], 1)

    def test_confirm_via_api_links_sale(self):
        stock_up(self.product, 5)
        order = make_order(self.product, quantity=2)

        resp = self.client.patch(
            f"/api/admin/orders/{order.id}/status/",
            {"status": "CONFIRMED"},
            format="json",
        )

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["data"]["status"], "CONFIRMED")
        sale = Sale.objects.get(order=order)
        self.assertEqual(resp.data["data"]["saleId"], str(sale.id))

    def test_confirm_without_stock_is_400(self):
        order = make_order(self.product, quantity=2)

        resp = self.client.patch(
            f"/api/admin/orders/{order.id}/status/",
            {"status": "CONFIRMED"},
            format="json",
        )

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"], "Insufficient stock")
        self.assertIn("Available: 0", resp.data["message"])

    def test_double_confirm_is_400(self):
        stock_up(self.product, 5)
        order = make_order(self.product, quantity=1)
        url = f"/api/admin/orders/{order.id}/status/"
        self.client.patch(url, {"status": "CONFIRMED"}, format="json")

        resp = self.client.patch(url, {"status": "CONFIRMED"}, format="json")

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"], "Already confirmed")

    def test_bad_status_value_is_400(self):
        order = make_order(self.product)
        resp = self.client.patch(
            f"/api/admin/orders/{order.id}/status/",
            {"status": "LOST"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)

    def test_unknown_order_is_404(self):
        resp = self.client.get("/api/admin/orders/00000000-0000-0000-0000-000000000000/")
        self.assertEqual(resp.status_code, 404)
        self.assertFalse(resp.data["success"])

    def test_stats(self):
        make_order(self.product, quantity=3, status=OrderStatus.CONFIRMED)
        make_order(self.product, quantity=1)

        resp = self.client.get("/api/admin/orders/stats/")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["data"]["totalOrders"], 2)
        self.assertEqual(resp.data["data"]["pendingOrders"], 1)
        self.assertEqual(resp.data["data"]["totalRevenue"], "30.00")
