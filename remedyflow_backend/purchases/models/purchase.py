# purchases/models/purchase.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone


class Purchase(models.Model):
    """
    Append-only inbound stock record.

    Every unit of stock a product ever had comes from a Purchase row.
    Rows are never edited or deleted through the ORM instance API;
    corrections are recorded as new rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="purchases",
    )

    quantity = models.PositiveIntegerField()
    unit_cost = models.DecimalField(max_digits=10, decimal_places=2)

    supplier = models.CharField(max_length=200, blank=True)
    notes = models.TextField(max_length=1000, blank=True)

    purchase_date = models.DateTimeField(default=timezone.now)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="recorded_purchases",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-purchase_date", "-created_at"]
        indexes = [
            models.Index(fields=["product", "purchase_date"], name="purchase_product_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gt=0), name="purchase_quantity_positive"),
            models.CheckConstraint(condition=Q(unit_cost__gt=0), name="purchase_unit_cost_positive"),
        ]

    def __str__(self):
        return f"Purchase {self.quantity} x {self.product_id} @ {self.unit_cost}"

    @property
    def total_cost(self):
        return self.unit_cost * self.quantity

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Purchases are immutable; record a new purchase instead.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Purchases cannot be deleted.")
