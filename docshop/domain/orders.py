"""Order lifecycle states and transition rules."""
from __future__ import annotations

ORDER_STATUS_NEW = "new"
ORDER_STATUS_REPORTED = "reported"
ORDER_STATUS_APPROVED = "approved"

ORDER_STATUSES = (ORDER_STATUS_NEW, ORDER_STATUS_REPORTED, ORDER_STATUS_APPROVED)

# status -> states it may move to; reporting twice only refreshes reportedAt
_TRANSITIONS = {
    ORDER_STATUS_NEW: {ORDER_STATUS_REPORTED},
    ORDER_STATUS_REPORTED: {ORDER_STATUS_REPORTED, ORDER_STATUS_APPROVED},
    ORDER_STATUS_APPROVED: set(),
}


def can_transition(current: str | None, target: str) -> bool:
    return target in _TRANSITIONS.get(current or "", set())


def short_id(order_id: str) -> str:
    return (order_id or "")[:8]
