# common/lookups.py

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError

from common.exceptions import NotFoundError


def get_or_not_found(queryset, message: str, **lookup):
    """
    queryset.get(**lookup), translating "missing" and "malformed id"
    into NotFoundError(message).
    """
    try:
        return queryset.get(**lookup)
    except (queryset.model.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFoundError(message)
