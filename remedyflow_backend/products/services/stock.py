# products/services/stock.py

"""
======================================================
PATH: products/services/stock.py
======================================================
STOCK CALCULATOR

Stock is never stored. For any product:

    current_stock = SUM(Purchase.quantity) - SUM(Sale.quantity)

Rules:
- Empty ledgers count as 0 (a brand new product has stock 0).
- Negative values are reported as-is; callers treat <= 0 as out of stock.
- Reads are snapshot reads; callers that must act on the value atomically
  (order confirmation, manual sales) lock the product row first and then
  call stock_of() inside the same transaction.
- Per-product totals use correlated subqueries, never a JOIN + SUM across
  both ledgers (that would multiply rows and double count).
"""

from __future__ import annotations

from dataclasses import dataclass

from django.db.models import F, IntegerField, OuterRef, Subquery, Sum
from django.db.models.functions import Coalesce

from common.lookups import get_or_not_found
from products.models import Product
from purchases.models import Purchase
from sales.models import Sale

DEFAULT_LOW_STOCK_THRESHOLD = 10

IN_STOCK = "in_stock"
OUT_OF_STOCK = "out_of_stock"


@dataclass(frozen=True)
class StockInfo:
    product_id: object
    product_name: str
    total_purchases: int
    total_sales: int
    current_stock: int
    is_low_stock: bool
    is_out_of_stock: bool


def is_low_stock(current_stock: int, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
    return 0 < current_stock <= threshold


def is_out_of_stock(current_stock: int) -> bool:
    return current_stock <= 0


# =====================================================
# SINGLE PRODUCT
# =====================================================

def total_purchased(product_id) -> int:
    return (
        Purchase.objects.filter(product_id=product_id)
        .aggregate(total=Coalesce(Sum("quantity"), 0))
        .get("total")
    )


def total_sold(product_id) -> int:
    return (
        Sale.objects.filter(product_id=product_id)
        .aggregate(total=Coalesce(Sum("quantity"), 0))
        .get("total")
    )


def stock_of(product_id) -> int:
    """Current derived stock. Unknown ids behave like empty ledgers (0)."""
    return total_purchased(product_id) - total_sold(product_id)


def has_sufficient_stock(product_id, quantity: int) -> bool:
    return stock_of(product_id) >= int(quantity)


def public_stock_status(product_id) -> str:
    """Storefront availability flag. The number itself is admin-only."""
    return IN_STOCK if stock_of(product_id) > 0 else OUT_OF_STOCK


# =====================================================
# QUERYSET ANNOTATION (lists, reports)
# =====================================================

def _ledger_total(model):
    totals = (
        model.objects.filter(product_id=OuterRef("pk"))
        .order_by()
        .values("product_id")
        .annotate(total=Sum("quantity"))
        .values("total")
    )
    return Coalesce(Subquery(totals, output_field=IntegerField()), 0)


def with_stock_totals(queryset):
    """
    Annotate a Product queryset with:
    - total_purchases
    - total_sales
    - current_stock
    """
    return queryset.annotate(
        total_purchases=_ledger_total(Purchase),
        total_sales=_ledger_total(Sale),
    ).annotate(current_stock=F("total_purchases") - F("total_sales"))


def stock_of_all(
    *,
    active_only: bool = True,
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> list[StockInfo]:
    qs = Product.objects.all()
    if active_only:
        qs = qs.filter(is_active=True)

    rows = with_stock_totals(qs).order_by("name").values(
        "id", "name", "total_purchases", "total_sales", "current_stock"
    )

    return [
        StockInfo(
            product_id=row["id"],
            product_name=row["name"],
            total_purchases=int(row["total_purchases"]),
            total_sales=int(row["total_sales"]),
            current_stock=int(row["current_stock"]),
            is_low_stock=is_low_stock(int(row["current_stock"]), low_stock_threshold),
            is_out_of_stock=is_out_of_stock(int(row["current_stock"])),
        )
        for row in rows
    ]


# =====================================================
# WRITE-PATH GUARD
# =====================================================

def lock_product(product_id) -> Product:
    """
    Row-lock the product for the rest of the current transaction.

    Every stock-consuming write (order confirmation, manual sale) takes this
    lock before reading stock_of(), so two of them against the same product
    run their check + insert one after the other.
    """
    return get_or_not_found(Product.objects.select_for_update(), "Product not found", id=product_id)
