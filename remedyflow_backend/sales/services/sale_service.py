# sales/services/sale_service.py

"""
SALE LEDGER (CORE SALES DOMAIN SERVICE)

SINGLE SOURCE OF TRUTH for:
- manual sale creation (admin walk-in sales)
- sale creation for confirmed storefront orders

GUARANTEES:
- A sale never takes stock below zero at the moment it is written:
  the product row is locked, stock is read, then the row is inserted,
  all inside one transaction.
- At most one sale per order (service check + OneToOne column).
"""

from __future__ import annotations

import logging
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from common.coercion import TWOPLACES, clean_text, money, require_positive_int, require_positive_money
from common.exceptions import DuplicateSaleError, InsufficientStockError
from common.lookups import get_or_not_found
from products.services.stock import lock_product, stock_of
from sales.models import Sale

logger = logging.getLogger(__name__)

MAX_SALE_QUANTITY = 10_000


@transaction.atomic
def record_manual_sale(
    *,
    product_id,
    quantity,
    sale_price,
    notes: str = "",
    sale_date=None,
    user=None,
) -> Sale:
    qty = require_positive_int(quantity, field_name="quantity", maximum=MAX_SALE_QUANTITY)
    price = require_positive_money(sale_price, field_name="salePrice")

    product = lock_product(product_id)

    available = stock_of(product.id)
    if available < qty:
        logger.info(
            "Manual sale rejected: product=%s requested=%s available=%s",
            product.id,
            qty,
            available,
        )
        raise InsufficientStockError(
            f"Insufficient stock. Available: {available}, Requested: {qty}",
            requested=qty,
            available=available,
        )

    sale = Sale.objects.create(
        product=product,
        quantity=qty,
        sale_price=price,
        notes=clean_text(notes, max_length=1000, field_name="notes"),
        sale_date=sale_date or timezone.now(),
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )

    logger.info("Manual sale recorded: product=%s qty=%s price=%s", product.id, qty, price)
    return sale


def record_sale_for_order(order, *, user=None) -> Sale:
    """
    Write the ledger row for a confirmed order.

    Preconditions (owned by orders.services.order_service):
    - caller holds an open transaction with the order and product rows locked
    - stock sufficiency has already been checked under that lock
    """
    if not transaction.get_connection().in_atomic_block:
        raise transaction.TransactionManagementError(
            "record_sale_for_order must run inside the order confirmation transaction"
        )

    if Sale.objects.filter(order_id=order.id).exists():
        raise DuplicateSaleError()

    unit_price = (Decimal(order.total_amount) / Decimal(order.quantity)).quantize(
        TWOPLACES, rounding=ROUND_HALF_UP
    )

    sale = Sale.objects.create(
        product_id=order.product_id,
        quantity=order.quantity,
        sale_price=unit_price,
        order=order,
        notes=f"Sale from order {order.order_number}",
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )

    logger.info(
        "Order sale recorded: order=%s product=%s qty=%s unit_price=%s",
        order.order_number,
        order.product_id,
        order.quantity,
        unit_price,
    )
    return sale


def list_sales(*, product_id=None, source=None):
    """source: "order" | "manual" | None (both)."""
    qs = Sale.objects.select_related("product", "order", "created_by")
    if product_id:
        qs = qs.filter(product_id=product_id)
    if source == "order":
        qs = qs.filter(order__isnull=False)
    elif source == "manual":
        qs = qs.filter(order__isnull=True)
    return qs.order_by("-sale_date", "-created_at")


def get_sale(sale_id) -> Sale:
    return get_or_not_found(
        Sale.objects.select_related("product", "order", "created_by"),
        "Sale not found",
        id=sale_id,
    )


def sales_stats(*, now=None) -> dict:
    now = now or timezone.now()
    start_of_day = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)

    line_total = ExpressionWrapper(
        F("sale_price") * F("quantity"),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )
    totals = Sale.objects.aggregate(
        total_units=Coalesce(Sum("quantity"), 0),
        total_revenue=Sum(line_total),
    )

    return {
        "total_sales": Sale.objects.count(),
        "total_units": int(totals["total_units"]),
        "total_revenue": money(totals["total_revenue"]),
        "sales_today": Sale.objects.filter(
            sale_date__gte=start_of_day,
            sale_date__lt=start_of_day + timedelta(days=1),
        ).count(),
        "order_sales": Sale.objects.filter(order__isnull=False).count(),
    }
