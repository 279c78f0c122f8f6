# orders/models/order.py

import uuid

from django.db import models
from django.db.models import Q
from django.utils import timezone


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    CONFIRMED = "CONFIRMED", "Confirmed"
    SHIPPED = "SHIPPED", "Shipped"
    DELIVERED = "DELIVERED", "Delivered"
    CANCELLED = "CANCELLED", "Cancelled"


def generate_order_number() -> str:
    """ORD<yyyymmdd>-<8 hex>, e.g. ORD20260314-9F3A1C2B."""
    stamp = timezone.localdate().strftime("%Y%m%d")
    return f"ORD{stamp}-{uuid.uuid4().hex[:8].upper()}"


class Order(models.Model):
    """
    Storefront order (single product line, cash on delivery).

    STOCK RULE:
    - Creating an order writes no ledger rows.
    - Only the transition to CONFIRMED writes a Sale (see
      orders.services.order_service.update_order_status).

    total_amount is the price snapshot selling_price * quantity taken at
    creation; later price edits never touch existing orders.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(
        max_length=32,
        unique=True,
        editable=False,
        default=generate_order_number,
    )

    customer_name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=20)

    province = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    area = models.CharField(max_length=100)
    address = models.TextField(max_length=1000)

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    quantity = models.PositiveIntegerField()
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)

    status = models.CharField(
        max_length=16,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )

    notes = models.TextField(max_length=1000, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="order_status_created_idx"),
            models.Index(fields=["email"], name="order_email_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gt=0), name="order_quantity_positive"),
            models.CheckConstraint(condition=Q(total_amount__gt=0), name="order_total_positive"),
        ]

    def __str__(self):
        return f"{self.order_number} ({self.status})"
