# products/services/catalog.py

"""
CATALOG QUERIES

Public:
- only active products
- stock totals are annotated so serializers can expose availability
  (in_stock / out_of_stock) without an extra query per row

Admin:
- every product, optional is_active filter, full stock totals
- delete is a soft delete (is_active=False); ledger rows keep their product
"""

from __future__ import annotations

import logging

from django.db.models import Q

from common.lookups import get_or_not_found
from products.models import Product
from products.services.stock import with_stock_totals

logger = logging.getLogger(__name__)


def _apply_filters(qs, *, search=None, category=None, category_id=None):
    search = (search or "").strip()
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(description__icontains=search))

    if category_id:
        qs = qs.filter(category_id=category_id)
    elif category:
        qs = qs.filter(category__name__iexact=str(category).strip())

    return qs


def public_products(*, search=None, category=None, category_id=None):
    qs = Product.objects.select_related("category").filter(is_active=True)
    qs = _apply_filters(qs, search=search, category=category, category_id=category_id)
    return with_stock_totals(qs).order_by("-created_at")


def public_product(product_id) -> Product:
    return get_or_not_found(
        with_stock_totals(Product.objects.select_related("category").filter(is_active=True)),
        "Product not found",
        id=product_id,
    )


def admin_products(*, search=None, category=None, category_id=None, is_active=None):
    qs = Product.objects.select_related("category")
    if is_active is not None:
        qs = qs.filter(is_active=is_active)
    qs = _apply_filters(qs, search=search, category=category, category_id=category_id)
    return with_stock_totals(qs).order_by("-created_at")


def get_product(product_id) -> Product:
    return get_or_not_found(
        with_stock_totals(Product.objects.select_related("category")),
        "Product not found",
        id=product_id,
    )


def soft_delete_product(product_id) -> Product:
    product = get_or_not_found(Product.objects.all(), "Product not found", id=product_id)
    if product.is_active:
        product.is_active = False
        product.save(update_fields=["is_active", "updated_at"])
        logger.info("Product deactivated: %s (%s)", product.name, product.id)
    return product
