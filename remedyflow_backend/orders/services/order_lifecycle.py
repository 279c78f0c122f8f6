# orders/services/order_lifecycle.py

"""
ORDER LIFECYCLE (ADVISORY)

Intended flow:

    PENDING -> CONFIRMED -> SHIPPED -> DELIVERED
    PENDING | CONFIRMED -> CANCELLED

The map is advisory: update_order_status() applies any requested status
and logs a WARNING when the move is not on the map. Only one transition
carries ledger effects (-> CONFIRMED) and only one is refused outright
(CONFIRMED -> CONFIRMED).
"""

from __future__ import annotations

from orders.models import OrderStatus

PENDING = OrderStatus.PENDING.value
CONFIRMED = OrderStatus.CONFIRMED.value
SHIPPED = OrderStatus.SHIPPED.value
DELIVERED = OrderStatus.DELIVERED.value
CANCELLED = OrderStatus.CANCELLED.value

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    PENDING: {CONFIRMED, CANCELLED},
    CONFIRMED: {SHIPPED, CANCELLED},
    SHIPPED: {DELIVERED},
    DELIVERED: set(),
    CANCELLED: set(),
}

TERMINAL_STATES = {DELIVERED, CANCELLED}


def is_advisory_transition(current: str, target: str) -> bool:
    """True when current -> target is on the intended flow."""
    return str(target) in ALLOWED_TRANSITIONS.get(str(current), set())


def is_terminal(status: str) -> bool:
    return str(status) in TERMINAL_STATES
