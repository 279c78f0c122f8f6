# common/tests/factories.py

"""
Small builders shared by the app test suites.

Stock is only ever created through the purchase ledger, the same way the
API does it.
"""

from decimal import Decimal
from itertools import count

from orders.models import Order, OrderStatus
from products.models import Category, Product
from purchases.models import Purchase
from users.models import User

_seq = count(1)


def make_admin(email="admin@remedyflow.test", password="S3cure-pass"):
    return User.objects.create_user(email=email, password=password, role=User.ROLE_ADMIN)


def make_customer(email="customer@remedyflow.test", password="S3cure-pass"):
    return User.objects.create_user(email=email, password=password)


def make_category(name=None, **extra):
    return Category.objects.create(name=name or f"Category {next(_seq)}", **extra)


def make_product(*, category=None, name=None, selling_price="12.50", purchase_price="8.00", **extra):
    fields = {
        "name": name or f"Arnica {next(_seq)}",
        "description": "Homeopathic remedy",
        "category": category or make_category(),
        "potency": "30C",
        "form": "Pellets",
        "manufacturer": "Boiron",
        "image": "https://cdn.remedyflow.test/p.png",
        "selling_price": Decimal(selling_price),
        "purchase_price": Decimal(purchase_price),
    }
    fields.update(extra)
    return Product.objects.create(**fields)


def stock_up(product, quantity, unit_cost="8.00"):
    return Purchase.objects.create(product=product, quantity=quantity, unit_cost=Decimal(unit_cost))


def make_order(product, *, quantity=1, status=OrderStatus.PENDING, email="jane@example.com"):
    return Order.objects.create(
        customer_name="Jane Doe",
        email=email,
        phone="0712345678",
        province="Western",
        city="Colombo",
        area="Kollupitiya",
        address="12 Galle Road, Colombo 03",
        product=product,
        quantity=quantity,
        total_amount=product.selling_price * quantity,
        status=status,
    )
