# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# The storefront has two kinds of account: back-office admins
# (catalog, purchases, sales, orders, reports) and customers.
ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"

ADMIN_ROLES = {ROLE_ADMIN}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


# =========================================================
# Admin gate
# =========================================================
class IsAdmin(BaseRolePermission):
    """
    Back-office gate for every /api/admin/ endpoint.
    Superusers pass regardless of role.
    """

    allowed_roles = ADMIN_ROLES

    def has_permission(self, request, view):
        user = request.user
        if user and user.is_authenticated and getattr(user, "is_superuser", False):
            return True
        return super().has_permission(request, view)
