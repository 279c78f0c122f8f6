import threading
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError, connection
from django.test import TestCase, TransactionTestCase

from common.exceptions import AlreadyConfirmedError, InsufficientStockError, InvalidInputError, NotFoundError
from common.tests.factories import make_admin, make_order, make_product, stock_up
from orders.models import Order, OrderStatus
from orders.services import order_service
from products.services.stock import stock_of
from sales.models import Sale


class CreateOrderTests(TestCase):
    def setUp(self):
        self.product = make_product(selling_price="12.50")

    def _create(self, **overrides):
        payload = {
            "customer_name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "0712345678",
            "province": "Western",
            "city": "Colombo",
            "area": "Kollupitiya",
            "address": "12 Galle Road, Colombo 03",
            "product_id": self.product.id,
            "quantity": 2,
        }
        payload.update(overrides)
        return order_service.create_order(**payload)

    def test_create_snapshots_total_and_starts_pending(self):
        order = self._create()

        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertEqual(order.total_amount, Decimal("25.00"))
        self.assertTrue(order.order_number.startswith("ORD"))

    def test_create_does_not_touch_stock(self):
        stock_up(self.product, 5)
        self._create(quantity=3)

        self.assertEqual(stock_of(self.product.id), 5)
        self.assertFalse(Sale.objects.exists())

    def test_later_price_change_keeps_order_total(self):
        order = self._create(quantity=2)
        self.product.selling_price = Decimal("99.00")
        self.product.save()

        order.refresh_from_db()
        self.assertEqual(order.total_amount, Decimal("25.00"))

    def test_inactive_product_is_not_found(self):
        self.product.is_active = False
        self.product.save()

        with self.assertRaises(NotFoundError):
            self._create()

    def test_unknown_product_is_not_found(self):
        with self.assertRaises(NotFoundError):
            self._create(product_id="00000000-0000-0000-0000-000000000000")

    def test_quantity_bounds(self):
        with self.assertRaises(InvalidInputError):
            self._create(quantity=0)
        with self.assertRaises(InvalidInputError):
            self._create(quantity=10_001)
        self.assertEqual(Order.objects.count(), 0)


class ConfirmOrderTests(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.product = make_product(selling_price="10.00")

    def test_confirm_writes_one_sale_and_reduces_stock(self):
        stock_up(self.product, 10)
        order = make_order(self.product, quantity=4)

        with self.captureOnCommitCallbacks(execute=True):
            updated = order_service.update_order_status(order.id, "CONFIRMED", user=self.admin)

        self.assertEqual(updated.status, OrderStatus.CONFIRMED)
        sale = Sale.objects.get(order=order)
        self.assertEqual(sale.quantity, 4)
        self.assertEqual(sale.sale_price, Decimal("10.00"))
        self.assertEqual(sale.notes, f"Sale from order {order.order_number}")
        self.assertEqual(sale.created_by, self.admin)
        self.assertEqual(stock_of(self.product.id), 6)

    def test_lowercase_status_is_accepted(self):
        stock_up(self.product, 1)
        order = make_order(self.product, quantity=1)

        updated = order_service.update_order_status(order.id, "confirmed")

        self.assertEqual(updated.status, OrderStatus.CONFIRMED)

    def test_insufficient_stock_leaves_order_untouched(self):
        stock_up(self.product, 2)
        order = make_order(self.product, quantity=3)

        with self.assertRaises(InsufficientStockError) as ctx:
            order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        self.assertEqual(ctx.exception.requested, 3)
        self.assertEqual(ctx.exception.available, 2)
        order.refresh_from_db()
        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertFalse(Sale.objects.exists())
        self.assertEqual(stock_of(self.product.id), 2)

    def test_second_confirm_is_rejected(self):
        stock_up(self.product, 10)
        order = make_order(self.product, quantity=2)
        order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        with self.assertRaises(AlreadyConfirmedError):
            order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        self.assertEqual(Sale.objects.filter(order=order).count(), 1)
        self.assertEqual(stock_of(self.product.id), 8)

    def test_sequential_confirms_never_oversell(self):
        stock_up(self.product, 5)
        first = make_order(self.product, quantity=3)
        second = make_order(self.product, quantity=3)

        order_service.update_order_status(first.id, OrderStatus.CONFIRMED)
        with self.assertRaises(InsufficientStockError):
            order_service.update_order_status(second.id, OrderStatus.CONFIRMED)

        self.assertEqual(stock_of(self.product.id), 2)
        second.refresh_from_db()
        self.assertEqual(second.status, OrderStatus.PENDING)

    def test_sale_failure_rolls_back_status(self):
        stock_up(self.product, 10)
        order = make_order(self.product, quantity=2)

        with mock.patch(
            "orders.services.order_service.record_sale_for_order",
            side_effect=RuntimeError("ledger down"),
        ):
            with self.assertRaises(RuntimeError):
                order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        order.refresh_from_db()
        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertFalse(Sale.objects.exists())

    def test_existing_sale_short_circuits_to_status_update(self):
        order = make_order(self.product, quantity=2, status=OrderStatus.CANCELLED)
        stock_up(self.product, 2)
        Sale.objects.create(product=self.product, quantity=2, sale_price=Decimal("10.00"), order=order)

        updated = order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        self.assertEqual(updated.status, OrderStatus.CONFIRMED)
        self.assertEqual(Sale.objects.filter(order=order).count(), 1)
        self.assertEqual(stock_of(self.product.id), 0)

    def test_unknown_order_is_not_found(self):
        with self.assertRaises(NotFoundError):
            order_service.update_order_status("00000000-0000-0000-0000-000000000000", OrderStatus.SHIPPED)

    def test_unknown_status_is_invalid(self):
        order = make_order(self.product)
        with self.assertRaises(InvalidInputError):
            order_service.update_order_status(order.id, "REFUNDED")


class OtherTransitionTests(TestCase):
    def setUp(self):
        self.product = make_product(selling_price="10.00")
        stock_up(self.product, 10)

    def test_cancel_after_confirm_keeps_the_sale(self):
        order = make_order(self.product, quantity=4)
        order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        updated = order_service.update_order_status(order.id, OrderStatus.CANCELLED)

        self.assertEqual(updated.status, OrderStatus.CANCELLED)
        self.assertEqual(Sale.objects.filter(order=order).count(), 1)
        self.assertEqual(stock_of(self.product.id), 6)

    def test_ship_and_deliver_do_not_touch_ledger(self):
        order = make_order(self.product, quantity=1, status=OrderStatus.CONFIRMED)

        order_service.update_order_status(order.id, OrderStatus.SHIPPED)
        updated = order_service.update_order_status(order.id, OrderStatus.DELIVERED)

        self.assertEqual(updated.status, OrderStatus.DELIVERED)
        self.assertFalse(Sale.objects.exists())

    def test_off_map_transition_is_applied_with_warning(self):
        order = make_order(self.product, status=OrderStatus.DELIVERED)

        with self.assertLogs("orders.services.order_service", level="WARNING") as logs:
            updated = order_service.update_order_status(order.id, OrderStatus.PENDING)

        self.assertEqual(updated.status, OrderStatus.PENDING)
        self.assertTrue(any("off-map" in line for line in logs.output))


class OrderNotificationHookTests(TestCase):
    def setUp(self):
        self.product = make_product()
        stock_up(self.product, 10)

    def test_notification_runs_after_commit(self):
        order = make_order(self.product)

        with mock.patch("orders.services.order_service.dispatch_order_status_notification") as dispatch:
            with self.captureOnCommitCallbacks(execute=True) as callbacks:
                order_service.update_order_status(order.id, OrderStatus.CONFIRMED)
                dispatch.assert_not_called()

        self.assertEqual(len(callbacks), 1)
        dispatch.assert_called_once_with(order.id)

    def test_failed_transition_registers_no_notification(self):
        order = make_order(self.product, quantity=50)

        with self.captureOnCommitCallbacks() as callbacks:
            with self.assertRaises(InsufficientStockError):
                order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        self.assertEqual(callbacks, [])

    def test_notification_failure_does_not_undo_status(self):
        order = make_order(self.product, quantity=1)

        with mock.patch(
            "orders.services.notifications.send_order_status_email",
            side_effect=OSError("smtp down"),
        ):
            with self.assertLogs("orders.services.notifications", level="ERROR"):
                with self.captureOnCommitCallbacks(execute=True):
                    updated = order_service.update_order_status(order.id, OrderStatus.CONFIRMED)

        self.assertEqual(updated.status, OrderStatus.CONFIRMED)
        order.refresh_from_db()
        self.assertEqual(order.status, OrderStatus.CONFIRMED)


class OrderStatsTests(TestCase):
    def test_revenue_counts_confirmed_orders_only(self):
        product = make_product(selling_price="10.00")
        make_order(product, quantity=2, status=OrderStatus.CONFIRMED)
        make_order(product, quantity=1, status=OrderStatus.CONFIRMED)
        make_order(product, quantity=5, status=OrderStatus.PENDING)
        make_order(product, quantity=5, status=OrderStatus.CANCELLED)

        stats = order_service.order_stats()

        self.assertEqual(stats["total_orders"], 4)
        self.assertEqual(stats["pending_orders"], 1)
        self.assertEqual(stats["confirmed_orders"], 2)
        self.assertEqual(stats["cancelled_orders"], 1)
        self.assertEqual(stats["total_revenue"], Decimal("30.00"))

    def test_empty_stats(self):
        stats = order_service.order_stats()
        self.assertEqual(stats["total_orders"], 0)
        self.assertEqual(stats["total_revenue"], Decimal("0.00"))


class ConcurrentConfirmTests(TransactionTestCase):
    """
    Two admins confirming at the same moment.

    The loser must fail cleanly: a domain error on backends with row locks,
    or a DatabaseError where the backend locks whole tables (SQLite).
    Either way stock never goes negative and no order gets two sales.
    """

    ALLOWED_FAILURES = (InsufficientStockError, AlreadyConfirmedError, DatabaseError)

    def setUp(self):
        self.product = make_product(selling_price="10.00")
        stock_up(self.product, 5)

    def _race(self, *order_ids):
        barrier = threading.Barrier(len(order_ids))
        outcomes = [None] * len(order_ids)

        def confirm(slot, order_id):
            try:
                barrier.wait(timeout=10)
                order_service.update_order_status(order_id, OrderStatus.CONFIRMED)
                outcomes[slot] = "ok"
            except self.ALLOWED_FAILURES as exc:
                outcomes[slot] = exc
            finally:
                connection.close()

        threads = [
            threading.Thread(target=confirm, args=(slot, order_id))
            for slot, order_id in enumerate(order_ids)
        ]
        with mock.patch("orders.services.order_service.dispatch_order_status_notification"):
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=30)

        self.assertTrue(all(o is not None for o in outcomes), outcomes)
        return outcomes

    def test_two_orders_cannot_oversell(self):
        first = make_order(self.product, quantity=3)
        second = make_order(self.product, quantity=3)

        outcomes = self._race(first.id, second.id)

        wins = outcomes.count("ok")
        self.assertLessEqual(wins, 1)
        self.assertGreaterEqual(stock_of(self.product.id), 0)
        self.assertEqual(stock_of(self.product.id), 5 - 3 * wins)
        self.assertEqual(Sale.objects.count(), wins)

        for order in (first, second):
            order.refresh_from_db()
            sales = Sale.objects.filter(order=order).count()
            self.assertLessEqual(sales, 1)
            if sales == 0:
                self.assertEqual(order.status, OrderStatus.PENDING)

    def test_same_order_confirmed_twice_has_one_sale(self):
        order = make_order(self.product, quantity=2)

        outcomes = self._race(order.id, order.id)

        wins = outcomes.count("ok")
        self.assertLessEqual(wins, 1)
        self.assertEqual(Sale.objects.filter(order=order).count(), wins)
        self.assertEqual(stock_of(self.product.id), 5 - 2 * wins)

        order.refresh_from_db()
        expected = OrderStatus.CONFIRMED if wins else OrderStatus.PENDING
        self.assertEqual(order.status, expected)
