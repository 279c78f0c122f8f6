# orders/services/order_service.py

"""
======================================================
PATH: orders/services/order_service.py
======================================================
ORDER STATE MACHINE

CRITICAL BUSINESS RULES:
1. Orders are created WITHOUT authentication (public storefront).
2. Creating an order does NOT affect stock.
3. Only the transition to CONFIRMED writes a Sale, and it does so in the
   same transaction as the status change, after a stock check taken under
   a row lock on the product.

update_order_status(order, CONFIRMED):
- already CONFIRMED            -> AlreadyConfirmedError (nothing written)
- a Sale already exists         -> status only (no second sale)
- otherwise                     -> lock product, check stock
                                   (InsufficientStockError leaves the order
                                   untouched), set CONFIRMED, write Sale
Any other status:
- plain field update, no ledger interaction, even when leaving CONFIRMED
  (cancelling a confirmed order does NOT return stock)

Transitions off the advisory map (orders.services.order_lifecycle) are
applied and logged at WARNING.

Customer email is registered with transaction.on_commit, so it only runs
once the status change is durable and can never roll it back.
"""

from __future__ import annotations

import logging
from functools import partial

from django.db import transaction
from django.db.models import Count, Q, Sum

from common.coercion import clean_text, money, require_positive_int
from common.exceptions import AlreadyConfirmedError, InsufficientStockError, InvalidInputError
from common.lookups import get_or_not_found
from orders.models import Order, OrderStatus
from orders.services.notifications import dispatch_order_status_notification
from orders.services.order_lifecycle import is_advisory_transition
from products.models import Product
from products.services.stock import lock_product, stock_of
from sales.models import Sale
from sales.services.sale_service import record_sale_for_order

logger = logging.getLogger(__name__)

MAX_ORDER_QUANTITY = 10_000


# =====================================================
# CREATE (PUBLIC)
# =====================================================

@transaction.atomic
def create_order(
    *,
    customer_name: str,
    email: str,
    phone: str,
    address: str,
    product_id,
    quantity,
    province: str = "",
    city: str = "",
    area: str = "",
    notes: str = "",
) -> Order:
    qty = require_positive_int(quantity, field_name="quantity", maximum=MAX_ORDER_QUANTITY)

    product = get_or_not_found(
        Product.objects.filter(is_active=True),
        "Product not found or inactive",
        id=product_id,
    )

    order = Order.objects.create(
        customer_name=clean_text(customer_name, max_length=200, field_name="customerName"),
        email=clean_text(email, max_length=254, field_name="email"),
        phone=clean_text(phone, max_length=20, field_name="phone"),
        province=clean_text(province, max_length=100, field_name="province"),
        city=clean_text(city, max_length=100, field_name="city"),
        area=clean_text(area, max_length=100, field_name="area"),
        address=clean_text(address, max_length=1000, field_name="address"),
        product=product,
        quantity=qty,
        total_amount=money(product.selling_price * qty),
        status=OrderStatus.PENDING,
        notes=clean_text(notes, max_length=1000, field_name="notes"),
    )

    logger.info(
        "Order created: %s product=%s qty=%s total=%s",
        order.order_number,
        product.id,
        qty,
        order.total_amount,
    )
    return order


# =====================================================
# STATUS TRANSITIONS (ADMIN)
# =====================================================

def _normalize_status(value) -> str:
    status = str(value or "").strip().upper()
    if status not in OrderStatus.values:
        raise InvalidInputError(
            f"status must be one of: {', '.join(OrderStatus.values)}"
        )
    return status


def _confirm(order: Order, *, user=None) -> None:
    """Confirm path. Runs inside update_order_status' transaction."""
    if Sale.objects.filter(order_id=order.id).exists():
        logger.warning(
            "Order %s already has a sale; confirming without a new ledger row",
            order.order_number,
        )
        order.status = OrderStatus.CONFIRMED
        order.save(update_fields=["status", "updated_at"])
        return

    # Serialises concurrent confirmations against the same product.
    lock_product(order.product_id)

    available = stock_of(order.product_id)
    if available < order.quantity:
        logger.info(
            "Confirm rejected: order=%s requested=%s available=%s",
            order.order_number,
            order.quantity,
            available,
        )
        raise InsufficientStockError(
            f"Insufficient stock to confirm order. Available: {available}, Requested: {order.quantity}",
            requested=order.quantity,
            available=available,
        )

    order.status = OrderStatus.CONFIRMED
    order.save(update_fields=["status", "updated_at"])

    record_sale_for_order(order, user=user)


def update_order_status(order_id, new_status, *, user=None) -> Order:
    target = _normalize_status(new_status)

    with transaction.atomic():
        order = get_or_not_found(
            Order.objects.select_for_update(),
            "Order not found",
            id=order_id,
        )
        previous = order.status

        if target == OrderStatus.CONFIRMED and previous == OrderStatus.CONFIRMED:
            raise AlreadyConfirmedError()

        if not is_advisory_transition(previous, target):
            logger.warning(
                "Order %s: off-map transition %s -> %s applied",
                order.order_number,
                previous,
                target,
            )

        if target == OrderStatus.CONFIRMED:
            _confirm(order, user=user)
        else:
            order.status = target
            order.save(update_fields=["status", "updated_at"])

        logger.info("Order %s: %s -> %s", order.order_number, previous, target)

        transaction.on_commit(partial(dispatch_order_status_notification, order.id))

    return get_order(order.id)


# =====================================================
# QUERIES (ADMIN)
# =====================================================

def list_orders(*, status=None, email=None, product_id=None):
    qs = Order.objects.select_related("product", "sale")
    if status:
        qs = qs.filter(status=_normalize_status(status))
    if email:
        qs = qs.filter(email__icontains=str(email).strip())
    if product_id:
        qs = qs.filter(product_id=product_id)
    return qs.order_by("-created_at")


def get_order(order_id) -> Order:
    return get_or_not_found(
        Order.objects.select_related("product", "product__category", "sale"),
        "Order not found",
        id=order_id,
    )


def order_stats() -> dict:
    agg = Order.objects.aggregate(
        total_orders=Count("id"),
        pending_orders=Count("id", filter=Q(status=OrderStatus.PENDING)),
        confirmed_orders=Count("id", filter=Q(status=OrderStatus.CONFIRMED)),
        shipped_orders=Count("id", filter=Q(status=OrderStatus.SHIPPED)),
        delivered_orders=Count("id", filter=Q(status=OrderStatus.DELIVERED)),
        cancelled_orders=Count("id", filter=Q(status=OrderStatus.CANCELLED)),
        total_revenue=Sum("total_amount", filter=Q(status=OrderStatus.CONFIRMED)),
    )
    agg["total_revenue"] = money(agg["total_revenue"])
    return agg
