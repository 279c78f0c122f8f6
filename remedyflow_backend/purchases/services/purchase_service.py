# purchases/services/purchase_service.py

"""
======================================================
PATH: purchases/services/purchase_service.py
======================================================
PURCHASE LEDGER

record_purchase():
- the only supported way to add stock
- product must exist (inactive products may still be restocked)
- quantity: 1..1,000,000 integer units
- unit_cost: > 0, quantized to cents

Stock effect: stock_of(product) grows by exactly `quantity`.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from common.coercion import clean_text, money, require_positive_int, require_positive_money
from common.lookups import get_or_not_found
from products.models import Product
from purchases.models import Purchase

logger = logging.getLogger(__name__)

MAX_PURCHASE_QUANTITY = 1_000_000


@transaction.atomic
def record_purchase(
    *,
    product_id,
    quantity,
    unit_cost,
    supplier: str = "",
    notes: str = "",
    purchase_date=None,
    user=None,
) -> Purchase:
    qty = require_positive_int(quantity, field_name="quantity", maximum=MAX_PURCHASE_QUANTITY)
    cost = require_positive_money(unit_cost, field_name="purchasePrice")

    product = get_or_not_found(Product.objects.all(), "Product not found", id=product_id)

    purchase = Purchase.objects.create(
        product=product,
        quantity=qty,
        unit_cost=cost,
        supplier=clean_text(supplier, max_length=200, field_name="supplier"),
        notes=clean_text(notes, max_length=1000, field_name="notes"),
        purchase_date=purchase_date or timezone.now(),
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )

    logger.info(
        "Purchase recorded: product=%s qty=%s unit_cost=%s",
        product.id,
        qty,
        cost,
    )
    return purchase


def list_purchases(*, product_id=None):
    qs = Purchase.objects.select_related("product", "created_by")
    if product_id:
        qs = qs.filter(product_id=product_id)
    return qs.order_by("-purchase_date", "-created_at")


def get_purchase(purchase_id) -> Purchase:
    return get_or_not_found(
        Purchase.objects.select_related("product", "created_by"),
        "Purchase not found",
        id=purchase_id,
    )


def purchase_stats(*, now=None) -> dict:
    now = now or timezone.now()
    start_of_day = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)

    line_cost = ExpressionWrapper(
        F("unit_cost") * F("quantity"),
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )
    totals = Purchase.objects.aggregate(
        total_units=Coalesce(Sum("quantity"), 0),
        total_cost=Sum(line_cost),
    )

    return {
        "total_purchases": Purchase.objects.count(),
        "total_units": int(totals["total_units"]),
        "total_cost": money(totals["total_cost"]),
        "purchases_today": Purchase.objects.filter(
            purchase_date__gte=start_of_day,
            purchase_date__lt=start_of_day + timedelta(days=1),
        ).count(),
    }
