# common/exceptions.py

"""
STOREFRONT DOMAIN ERRORS

Centralized error taxonomy for every service in the project.

Rules:
- Services raise these synchronously; views never catch them.
- common.exception_handler translates each one 1:1 into the failure envelope
  {error, message, success: false} with the class' HTTP status.
- Nothing here is retried anywhere in the core.
"""

from __future__ import annotations


class StorefrontError(Exception):
    """Base exception for all domain failures."""

    status_code = 400
    error = "Bad request"
    default_message = "The request could not be processed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(StorefrontError):
    """Malformed or out-of-range input."""

    error = "Validation error"
    default_message = "Invalid input."


class NotFoundError(StorefrontError):
    """Unknown product, order, category, purchase or sale."""

    status_code = 404
    error = "Not found"
    default_message = "Resource not found."


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds derived stock."""

    error = "Insufficient stock"
    default_message = "Insufficient stock."

    def __init__(self, message: str | None = None, *, requested: int | None = None, available: int | None = None):
        self.requested = requested
        self.available = available
        super().__init__(message)


class AlreadyConfirmedError(StorefrontError):
    """Duplicate confirm attempt on an order that is already CONFIRMED."""

    error = "Already confirmed"
    default_message = "Order is already confirmed."


class DuplicateSaleError(StorefrontError):
    """A sale is already linked to the order (should not surface)."""

    error = "Duplicate sale"
    default_message = "Sale already exists for this order."


class NameConflictError(StorefrontError):
    """Category name reuse."""

    error = "Name conflict"
    default_message = "Category with this name already exists."


class ReferentialBlockError(StorefrontError):
    """Category deletion while products still reference it."""

    error = "Category in use"
    default_message = (
        "Cannot delete category with existing products. "
        "Please reassign or remove products first."
    )


class UnauthorizedError(StorefrontError):
    """Missing or invalid admin session."""

    status_code = 401
    error = "Unauthorized"
    default_message = "You must be logged in to access this resource."
