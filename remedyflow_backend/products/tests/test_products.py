from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework.test import APIClient

from common.exceptions import NameConflictError, ReferentialBlockError
from common.tests.factories import make_admin, make_category, make_customer, make_product, stock_up
from products.models import Category, Product
from products.services import catalog, categories


class CategoryServiceTests(TestCase):
    def test_name_reuse_is_a_conflict(self):
        categories.create_category(name="Pain Relief")

        with self.assertRaises(NameConflictError):
            categories.create_category(name="pain relief")

    def test_rename_onto_existing_name_is_a_conflict(self):
        make_category(name="Allergy")
        other = make_category(name="Cold & Flu")

        with self.assertRaises(NameConflictError):
            categories.update_category(other.id, name="ALLERGY")

    def test_rename_same_name_different_case_is_allowed(self):
        category = make_category(name="allergy")
        updated = categories.update_category(category.id, name="Allergy")
        self.assertEqual(updated.name, "Allergy")

    def test_delete_blocked_while_products_reference_it(self):
        category = make_category()
        make_product(category=category, is_active=False)

        with self.assertRaises(ReferentialBlockError):
            categories.delete_category(category.id)
        self.assertTrue(Category.objects.filter(id=category.id).exists())

    def test_delete_empty_category(self):
        category = make_category()
        categories.delete_category(category.id)
        self.assertFalse(Category.objects.filter(id=category.id).exists())


class ProductModelTests(TestCase):
    def test_prices_must_be_positive(self):
        product = make_product()
        product.purchase_price = Decimal("0.00")

        with self.assertRaises(ValidationError):
            product.full_clean()


class CatalogServiceTests(TestCase):
    def test_soft_delete_keeps_row(self):
        product = make_product()

        catalog.soft_delete_product(product.id)

        product.refresh_from_db()
        self.assertFalse(product.is_active)
        self.assertFalse(catalog.public_products().filter(id=product.id).exists())

    def test_public_filters(self):
        pain = make_category(name="Pain")
        make_product(name="Arnica Gel", category=pain)
        make_product(name="Chamomilla")

        self.assertEqual(catalog.public_products(search="arnica").count(), 1)
        self.assertEqual(catalog.public_products(category="pain").count(), 1)
        self.assertEqual(catalog.public_products(category_id=pain.id).count(), 1)


class PublicProductApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.product = make_product(name="Arnica", purchase_price="4.00")

    def test_list_hides_cost_and_stock_number(self):
        stock_up(self.product, 3)

        resp = self.client.get("/api/products/")

        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.data["success"])
        item = resp.data["data"][0]
        self.assertNotIn("purchasePrice", item)
        self.assertNotIn("currentStock", item)
        self.assertEqual(item["availability"], "in_stock")
        self.assertEqual(resp.data["pagination"]["total"], 1)

    def test_detail_of_inactive_product_is_404(self):
        self.product.is_active = False
        self.product.save()

        resp = self.client.get(f"/api/products/{self.product.id}/")

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data["error"], "Not found")

    def test_pagination_limit_is_capped(self):
        resp = self.client.get("/api/products/", {"limit": 500})
        self.assertEqual(resp.data["pagination"]["limit"], 100)

    def test_categories_are_public(self):
        make_category(name="Hidden", is_active=False)
        resp = self.client.get("/api/categories/")
        self.assertEqual(resp.status_code, 200)
        self.assertNotIn("Hidden", [c["name"] for c in resp.data["data"]])


class AdminProductApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(make_admin())
        self.category = make_category(name="Homeopathy")

    def _payload(self, **overrides):
        payload = {
            "name": "Rhus Tox",
            "description": "For joint stiffness and strains",
            "categoryId": str(self.category.id),
            "potency": "30C",
            "form": "Pellets",
            "manufacturer": "Boiron",
            "sellingPrice": "9.99",
            "purchasePrice": "5.00",
            "image": "https://cdn.remedyflow.test/rhus.png",
        }
        payload.update(overrides)
        return payload

    def test_create_returns_stock_totals(self):
        resp = self.client.post("/api/admin/products/", self._payload(), format="json")

        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["message"], "Product created successfully")
        self.assertEqual(resp.data["data"]["purchasePrice"], "5.00")
        self.assertEqual(resp.data["data"]["currentStock"], 0)

    def test_zero_price_is_rejected(self):
        resp = self.client.post("/api/admin/products/", self._payload(sellingPrice="0"), format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(Product.objects.exists())

    def test_delete_is_soft(self):
        product = make_product(category=self.category)

        resp = self.client.delete(f"/api/admin/products/{product.id}/")

        self.assertEqual(resp.status_code, 200)
        product.refresh_from_db()
        self.assertFalse(product.is_active)

    def test_category_delete_blocked_is_400(self):
        make_product(category=self.category)

        resp = self.client.delete(f"/api/admin/categories/{self.category.id}/")

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"], "Category in use")

    def test_category_conflict_is_400(self):
        resp = self.client.post("/api/admin/categories/", {"name": "homeopathy"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["error"], "Name conflict")

    def test_customer_cannot_manage_products(self):
        client = APIClient()
        client.force_authenticate(make_customer())
        resp = client.get("/api/admin/products/")
        self.assertEqual(resp.status_code, 403)
