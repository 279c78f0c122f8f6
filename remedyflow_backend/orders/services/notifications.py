# orders/services/notifications.py
"""
CUSTOMER ORDER NOTIFICATIONS (EmailJS REST API)

Fire-and-forget:
- dispatched from transaction.on_commit, never inside the status transaction
- every failure is logged (logger.exception) and swallowed; an email problem
  never changes the outcome of a status update
- skipped when ORDER_NOTIFICATIONS_ENABLED is false or EmailJS is not
  configured (SERVICE_ID + PUBLIC_KEY + a template for the status)

Config lives in settings.EMAILJS (see backend/settings/base.py).
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from django.conf import settings

from orders.models import Order

logger = logging.getLogger(__name__)

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"

NOTIFIABLE_STATUSES = ("CONFIRMED", "CANCELLED", "SHIPPED", "DELIVERED")


class NotificationError(Exception):
    pass


def _cfg() -> dict:
    cfg = getattr(settings, "EMAILJS", {}) or {}
    return cfg if isinstance(cfg, dict) else {}


def notifications_enabled() -> bool:
    return bool(getattr(settings, "ORDER_NOTIFICATIONS_ENABLED", False))


def template_for(status: str) -> str:
    templates = _cfg().get("TEMPLATES") or {}
    return (templates.get(str(status).upper()) or "").strip()


def is_configured(status: str) -> bool:
    cfg = _cfg()
    return bool(cfg.get("SERVICE_ID") and cfg.get("PUBLIC_KEY") and template_for(status))


def _fmt(amount) -> str:
    return f"{Decimal(amount):.2f}"


def build_template_params(order) -> dict[str, Any]:
    """
    Template variables shared by every order status email.
    The shape matches the storefront's EmailJS templates.
    """
    product = order.product
    return {
        "email": order.email,
        "customer_name": order.customer_name,
        "order_id": order.order_number,
        "status": str(order.status),
        "address": ", ".join(p for p in (order.address, order.area, order.city, order.province) if p),
        "orders": [
            {
                "name": product.name,
                "units": order.quantity,
                "price": _fmt(order.total_amount),
                "image_url": product.image or "",
            }
        ],
        "cost": {
            "shipping": "0.00",
            "tax": "0.00",
            "total": _fmt(order.total_amount),
        },
    }


def _post_json(url: str, payload: dict, *, timeout: int) -> str:
    req = Request(
        url=url,
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    try:
        with urlopen(req, timeout=timeout) as resp:
            return resp.read().decode("utf-8", errors="replace")
    except HTTPError as exc:
        body = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
        raise NotificationError(f"EmailJS HTTP {exc.code}: {body[:300]}") from exc
    except URLError as exc:
        raise NotificationError(f"EmailJS unreachable: {exc.reason}") from exc


def send_order_status_email(order) -> bool:
    """
    Send the email for order.status. Returns True when a request was sent.
    Raises NotificationError on transport/API failure.
    """
    status = str(order.status).upper()

    if status not in NOTIFIABLE_STATUSES:
        logger.debug("No email for status %s (order %s)", status, order.order_number)
        return False

    if not notifications_enabled():
        logger.debug("Order notifications disabled; skipping %s", order.order_number)
        return False

    if not is_configured(status):
        logger.warning("EmailJS not configured for %s; skipping email for %s", status, order.order_number)
        return False

    cfg = _cfg()
    payload = {
        "service_id": cfg["SERVICE_ID"],
        "template_id": template_for(status),
        "user_id": cfg["PUBLIC_KEY"],
        "template_params": build_template_params(order),
    }
    if cfg.get("PRIVATE_KEY"):
        payload["accessToken"] = cfg["PRIVATE_KEY"]

    _post_json(EMAILJS_SEND_URL, payload, timeout=int(cfg.get("TIMEOUT_SECONDS") or 10))
    logger.info("Order %s email sent to %s", status, order.email)
    return True


def dispatch_order_status_notification(order_id) -> None:
    """
    on_commit entry point. Reloads the order so the email reflects what
    was actually committed, then sends. Never raises.
    """
    try:
        order = Order.objects.select_related("product").get(id=order_id)
        send_order_status_email(order)
    except Exception:
        logger.exception("Order notification failed for order %s", order_id)
