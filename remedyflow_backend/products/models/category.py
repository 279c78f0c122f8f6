# products/models/category.py

import uuid

from django.core.validators import MinLengthValidator
from django.db import models


class Category(models.Model):
    """
    Storefront category (admin managed).

    Rules:
    - name is unique (case-insensitive check lives in products.services.categories)
    - cannot be deleted while any product references it
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(
        max_length=100,
        unique=True,
        validators=[MinLengthValidator(2)],
    )
    description = models.CharField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name
