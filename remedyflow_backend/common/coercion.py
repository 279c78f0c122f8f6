# common/coercion.py

"""
INPUT COERCION HELPERS (service layer)

Services accept plain Python values (views pass serializer output, management
commands and tests pass literals). These helpers normalise them and raise
InvalidInputError with a field-specific message.

Rules:
- Quantities are integer units; bools are rejected.
- Money is Decimal quantized to 2 places (ROUND_HALF_UP).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from common.exceptions import InvalidInputError

TWOPLACES = Decimal("0.01")


def money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")
    return Decimal(str(value)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def to_int(value, *, field_name="value") -> int:
    if value is None or value == "":
        raise InvalidInputError(f"{field_name} is required")
    if isinstance(value, bool):
        raise InvalidInputError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidInputError(f"{field_name} must be a whole integer unit")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field_name} must be an integer")


def require_positive_int(value, *, field_name: str, maximum: int | None = None) -> int:
    v = to_int(value, field_name=field_name)
    if v <= 0:
        raise InvalidInputError(f"{field_name} must be greater than zero")
    if maximum is not None and v > maximum:
        raise InvalidInputError(f"{field_name} must be at most {maximum}")
    return v


def require_positive_money(value, *, field_name: str) -> Decimal:
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidInputError(f"{field_name} is required")
    try:
        amount = money(value)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidInputError(f"{field_name} must be a valid decimal")
    if amount <= Decimal("0.00"):
        raise InvalidInputError(f"{field_name} must be greater than zero")
    return amount


def clean_text(value, *, max_length: int | None = None, field_name="value") -> str:
    text = str(value or "").strip()
    if max_length is not None and len(text) > max_length:
        raise InvalidInputError(f"{field_name} must be at most {max_length} characters")
    return text


def parse_flag(value):
    """
    Query-string boolean: "true"/"1"/"yes" -> True, "false"/"0"/"no" -> False,
    missing or blank -> None.
    """
    text = str(value or "").strip().lower()
    if not text:
        return None
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise InvalidInputError(f"Invalid boolean value: {value}")


def query_int(value, *, field_name: str, default: int, minimum: int = 1, maximum: int | None = None) -> int:
    if value is None or str(value).strip() == "":
        return default
    v = to_int(str(value).strip(), field_name=field_name)
    if v < minimum:
        raise InvalidInputError(f"{field_name} must be at least {minimum}")
    if maximum is not None and v > maximum:
        raise InvalidInputError(f"{field_name} must be at most {maximum}")
    return v
