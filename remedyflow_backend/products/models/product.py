# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from .category import Category


class Product(models.Model):
    """
    Represents a sellable medicine.

    STOCK MODEL (IMPORTANT):
    - Product itself does NOT store stock
    - Stock = SUM(purchases.quantity) - SUM(sales.quantity)
    - See products.services.stock for the only place it is computed

    PRICING:
    - selling_price is what customers pay (snapshotted onto orders)
    - purchase_price is admin-only and never leaves a public endpoint
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200, db_index=True)
    description = models.TextField(max_length=5000)

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )

    potency = models.CharField(max_length=100)
    form = models.CharField(max_length=100)
    manufacturer = models.CharField(max_length=200)

    batch_number = models.CharField(max_length=100, blank=True)
    expiry_date = models.DateField(null=True, blank=True)

    image = models.URLField(max_length=500)

    selling_price = models.DecimalField(max_digits=10, decimal_places=2)
    purchase_price = models.DecimalField(max_digits=10, decimal_places=2)

    is_hot = models.BooleanField(default=False)
    is_best_seller = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "created_at"], name="product_active_created_idx"),
            models.Index(fields=["expiry_date"], name="product_expiry_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(selling_price__gt=0),
                name="product_selling_price_positive",
            ),
            models.CheckConstraint(
                condition=Q(purchase_price__gt=0),
                name="product_purchase_price_positive",
            ),
        ]

    def __str__(self):
        return f"{self.name} {self.potency}".strip()

    def clean(self):
        if self.selling_price is None or Decimal(self.selling_price) <= 0:
            raise ValidationError({"selling_price": "Selling price must be greater than zero"})

        if self.purchase_price is None or Decimal(self.purchase_price) <= 0:
            raise ValidationError({"purchase_price": "Purchase price must be greater than zero"})
