"""
Order status state machine

pending -> processing -> ready -> delivered | completed, with cancelled
reachable from any non-terminal state. Moves only go forward; the batch
"unmark" rollback in BatchService is the single exception.
"""
from datetime import datetime
from typing import Dict

from laundry_service.exceptions import StateConflict, ValidationFailed


STATUS_RANK: Dict[str, int] = {
    "pending": 0,
    "processing": 1,
    "ready": 2,
    "delivered": 3,
    "completed": 3,
}
TERMINAL_STATUSES = frozenset({"delivered", "completed", "cancelled"})

# Timestamp stamped when an order enters a status
STATUS_TIMESTAMP = {
    "processing": "received_at",
    "ready": "ready_at",
    "delivered": "delivered_at",
    "completed": "delivered_at",
}


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: str, new: str) -> bool:
    """Check whether an order may move from one status to another"""
    if is_terminal(current):
        return False
    if new == "cancelled":
        return True
    if new not in STATUS_RANK or current not in STATUS_RANK:
        return False
    return STATUS_RANK[new] > STATUS_RANK[current]


def check_transition(current: str, new: str) -> None:
    """
    Raises:
        ValidationFailed: If the target status is unknown
        StateConflict: If the move is not allowed from the current status
    """
    if new != "cancelled" and new not in STATUS_RANK:
        raise ValidationFailed(f"Unknown order status: {new}")
    if not can_transition(current, new):
        raise StateConflict(f"Cannot change order status from {current} to {new}")


def transition_fields(new: str, now: datetime) -> dict:
    """Column updates for entering a status"""
    fields = {"status": new}
    timestamp_field = STATUS_TIMESTAMP.get(new)
    if timestamp_field:
        fields[timestamp_field] = now
    return fields
