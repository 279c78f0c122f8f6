# reports/services/stock_reports.py

"""
======================================================
PATH: reports/services/stock_reports.py
======================================================
STOCK + EXPIRY REPORTS (READ ONLY)

All numbers come from products.services.stock; nothing here writes.

Thresholds and windows are explicit parameters. The HTTP layer passes
settings.LOW_STOCK_THRESHOLD / settings.EXPIRY_WINDOW_DAYS when the
caller does not supply them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from django.utils import timezone

from common.exceptions import InvalidInputError
from products.models import Product
from products.services.stock import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    StockInfo,
    stock_of_all,
    with_stock_totals,
)

DEFAULT_EXPIRY_WINDOW_DAYS = 90

REPORT_ALL = "all"
REPORT_LOW_STOCK = "low-stock"
REPORT_OUT_OF_STOCK = "out-of-stock"
REPORT_TYPES = (REPORT_ALL, REPORT_LOW_STOCK, REPORT_OUT_OF_STOCK)

SEVERITY_CRITICAL = "critical"
SEVERITY_WARNING = "warning"
SEVERITY_NOTICE = "notice"
SEVERITIES = (SEVERITY_CRITICAL, SEVERITY_WARNING, SEVERITY_NOTICE)

CRITICAL_DAYS = 30
WARNING_DAYS = 60


@dataclass(frozen=True)
class ExpiryAlert:
    product_id: object
    product_name: str
    expiry_date: date
    days_until_expiry: int
    current_stock: int
    severity: str


# =====================================================
# STOCK
# =====================================================

def low_stock_alerts(threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[StockInfo]:
    return [s for s in stock_of_all(low_stock_threshold=threshold) if s.is_low_stock]


def out_of_stock_products() -> list[StockInfo]:
    return [s for s in stock_of_all() if s.is_out_of_stock]


def stock_report(report_type: str = REPORT_ALL, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[StockInfo]:
    if report_type == REPORT_LOW_STOCK:
        return low_stock_alerts(threshold)
    if report_type == REPORT_OUT_OF_STOCK:
        return out_of_stock_products()
    if report_type == REPORT_ALL:
        return stock_of_all(low_stock_threshold=threshold)
    raise InvalidInputError(f"type must be one of: {', '.join(REPORT_TYPES)}")


# =====================================================
# EXPIRY
# =====================================================

def severity_for(days_until_expiry: int) -> str:
    if days_until_expiry <= CRITICAL_DAYS:
        return SEVERITY_CRITICAL
    if days_until_expiry <= WARNING_DAYS:
        return SEVERITY_WARNING
    return SEVERITY_NOTICE


def days_until(expiry_date: date, *, now: datetime) -> int:
    """Whole days (rounded up) from now to local midnight of expiry_date."""
    expires_at = timezone.make_aware(datetime.combine(expiry_date, time.min))
    return math.ceil((expires_at - now) / timedelta(days=1))


def expiry_alerts(window_days: int = DEFAULT_EXPIRY_WINDOW_DAYS, *, now=None) -> list[ExpiryAlert]:
    """
    Active products whose expiry_date falls after today and no later than
    now + window_days, soonest first. A product expiring today has already
    expired (expiry is taken at local midnight). Products without an expiry
    date never appear.
    """
    now = timezone.localtime(now or timezone.now())
    horizon = now + timedelta(days=window_days)

    rows = (
        with_stock_totals(
            Product.objects.filter(
                is_active=True,
                expiry_date__isnull=False,
                expiry_date__gt=now.date(),
                expiry_date__lte=horizon.date(),
            )
        )
        .order_by("expiry_date", "name")
        .values("id", "name", "expiry_date", "current_stock")
    )

    alerts = []
    for row in rows:
        days = days_until(row["expiry_date"], now=now)
        alerts.append(
            ExpiryAlert(
                product_id=row["id"],
                product_name=row["name"],
                expiry_date=row["expiry_date"],
                days_until_expiry=days,
                current_stock=int(row["current_stock"]),
                severity=severity_for(days),
            )
        )
    return alerts


def group_by_severity(alerts: list[ExpiryAlert]) -> dict[str, list[ExpiryAlert]]:
    return {level: [a for a in alerts if a.severity == level] for level in SEVERITIES}
