# sales/models/sale.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone


class Sale(models.Model):
    """
    Append-only outbound stock record.

    Two origins:
    - manual (walk-in / phone) sales recorded by an admin: order is NULL
    - confirmed storefront orders: order is set, one sale per order at most
      (enforced by the OneToOne column as well as by the service layer)

    sale_price is the UNIT price (snapshot); line total = sale_price * quantity.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="sales",
    )

    quantity = models.PositiveIntegerField()
    sale_price = models.DecimalField(max_digits=10, decimal_places=2)

    order = models.OneToOneField(
        "orders.Order",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="sale",
    )

    notes = models.TextField(max_length=1000, blank=True)
    sale_date = models.DateTimeField(default=timezone.now)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="recorded_sales",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-sale_date", "-created_at"]
        indexes = [
            models.Index(fields=["product", "sale_date"], name="sale_product_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gt=0), name="sale_quantity_positive"),
            models.CheckConstraint(condition=Q(sale_price__gt=0), name="sale_price_positive"),
        ]

    def __str__(self):
        return f"Sale {self.quantity} x {self.product_id} @ {self.sale_price}"

    @property
    def total_amount(self):
        return self.sale_price * self.quantity

    @property
    def is_from_order(self) -> bool:
        return self.order_id is not None

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Sales are immutable once recorded.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Sales cannot be deleted.")
