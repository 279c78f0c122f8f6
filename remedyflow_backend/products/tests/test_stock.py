from django.test import TestCase

from common.tests.factories import make_product, stock_up
from products.services import stock
from sales.models import Sale


class StockCalculatorTests(TestCase):
    """
    GUARANTEES:
    - stock = purchases - sales, empty ledgers count as zero
    - per-product totals are not inflated by the other ledger's row count
    """

    def setUp(self):
        self.product = make_product(name="Arnica")

    def test_new_product_has_zero_stock(self):
        self.assertEqual(stock.total_purchased(self.product.id), 0)
        self.assertEqual(stock.total_sold(self.product.id), 0)
        self.assertEqual(stock.stock_of(self.product.id), 0)
        self.assertEqual(stock.public_stock_status(self.product.id), stock.OUT_OF_STOCK)

    def test_purchases_minus_sales(self):
        stock_up(self.product, 100)
        stock_up(self.product, 50)
        Sale.objects.create(product=self.product, quantity=30, sale_price="12.50")

        self.assertEqual(stock.stock_of(self.product.id), 120)
        self.assertTrue(stock.has_sufficient_stock(self.product.id, 120))
        self.assertFalse(stock.has_sufficient_stock(self.product.id, 121))
        self.assertEqual(stock.public_stock_status(self.product.id), stock.IN_STOCK)

    def test_annotated_totals_do_not_double_count(self):
        for _ in range(3):
            stock_up(self.product, 10)
        for _ in range(2):
            Sale.objects.create(product=self.product, quantity=4, sale_price="12.50")

        (info,) = stock.stock_of_all()

        self.assertEqual(info.total_purchases, 30)
        self.assertEqual(info.total_sales, 8)
        self.assertEqual(info.current_stock, 22)
        self.assertFalse(info.is_low_stock)
        self.assertFalse(info.is_out_of_stock)

    def test_flags_follow_threshold(self):
        stock_up(self.product, 10)

        (info,) = stock.stock_of_all(low_stock_threshold=10)
        self.assertTrue(info.is_low_stock)

        (info,) = stock.stock_of_all(low_stock_threshold=9)
        self.assertFalse(info.is_low_stock)

    def test_active_only_by_default(self):
        make_product(name="Retired", is_active=False)

        self.assertEqual([i.product_name for i in stock.stock_of_all()], ["Arnica"])
        self.assertEqual(len(stock.stock_of_all(active_only=False)), 2)

    def test_low_and_out_predicates(self):
        self.assertFalse(stock.is_low_stock(0))
        self.assertTrue(stock.is_low_stock(1))
        self.assertTrue(stock.is_out_of_stock(0))
        self.assertTrue(stock.is_out_of_stock(-2))
