# products/services/categories.py

"""
CATEGORY SERVICE (admin CRUD + public listing)

Rules:
- Names are unique case-insensitively (NameConflictError on create/rename).
- A category referenced by any product (active or not) cannot be deleted
  (ReferentialBlockError); admins reassign or remove products first.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Count

from common.exceptions import NameConflictError, ReferentialBlockError
from common.lookups import get_or_not_found
from products.models import Category

logger = logging.getLogger(__name__)


def list_categories(*, include_inactive: bool = False):
    qs = Category.objects.annotate(product_count=Count("products")).order_by("name")
    if not include_inactive:
        qs = qs.filter(is_active=True)
    return qs


def get_category(category_id) -> Category:
    return get_or_not_found(
        Category.objects.annotate(product_count=Count("products")),
        "Category not found",
        id=category_id,
    )


def _ensure_name_free(name: str, *, exclude_id=None) -> None:
    qs = Category.objects.filter(name__iexact=name)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise NameConflictError()


@transaction.atomic
def create_category(*, name: str, description: str = "", is_active: bool = True) -> Category:
    name = (name or "").strip()
    _ensure_name_free(name)

    category = Category.objects.create(
        name=name,
        description=(description or "").strip(),
        is_active=is_active,
    )
    logger.info("Category created: %s", category.name)
    return category


@transaction.atomic
def update_category(category_id, **changes) -> Category:
    category = get_category(category_id)

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if name.lower() != category.name.lower():
            _ensure_name_free(name, exclude_id=category.id)
        category.name = name

    if "description" in changes:
        category.description = (changes["description"] or "").strip()

    if "is_active" in changes:
        category.is_active = bool(changes["is_active"])

    category.save()
    return category


@transaction.atomic
def delete_category(category_id) -> None:
    category = get_category(category_id)

    if category.products.exists():
        raise ReferentialBlockError()

    category.delete()
    logger.info("Category deleted: %s", category.name)
