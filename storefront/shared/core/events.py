"""Canonical event topics and payload factories for the storefront."""

from __future__ import annotations

import time
from typing import Any, Dict, Literal

from .event_bus import EventPayload

# UI -> state machine
TOPIC_USER_ACTION = "user.action"

# State machine -> UI
TOPIC_STATE_CHANGED = "state.changed"
TOPIC_ACTION_REJECTED = "action.rejected"
TOPIC_LOGS_EVENT = "logs.event"

# Lifecycle notifications
TOPIC_CATALOG_LOADED = "catalog.loaded"
TOPIC_ORDER_CONFIRMED = "order.confirmed"
TOPIC_CHECKOUT_FAILED = "checkout.failed"


def create_user_action_event(action: Any) -> EventPayload:
    """Wrap a domain action so it can travel over the bus."""
    return {"action": action}


def create_state_changed_event(state: Any, action_type: str) -> EventPayload:
    """Create a state changed event.

    Args:
        state: The new immutable AppState snapshot
        action_type: Name of the action that produced it
    """
    return {
        "state": state,
        "action_type": action_type,
    }


def create_action_rejected_event(action_type: str, reason: str) -> EventPayload:
    return {
        "action_type": action_type,
        "reason": reason,
    }


def create_catalog_loaded_event(product_count: int) -> EventPayload:
    return {"product_count": product_count}


def create_order_confirmed_event(order_id: int, total: str, line_count: int) -> EventPayload:
    """Create an order confirmed event. `total` is a decimal string."""
    return {
        "order_id": order_id,
        "total": total,
        "line_count": line_count,
    }


def create_checkout_failed_event(order_id: int | None, reason: str) -> EventPayload:
    return {
        "order_id": order_id,
        "reason": reason,
    }


def create_logs_event(
    message: str,
    level: Literal["info", "warning", "error", "success"] = "info",
    topic: str | None = None,
) -> EventPayload:
    """Create a log event for the status feed."""
    return {
        "message": message,
        "level": level,
        "topic": topic,
        "ts": time.time(),
    }


def describe_payload(payload: Dict[str, Any]) -> str:
    """Short human readable summary used in debug logs."""
    return ", ".join(f"{key}={value!r}" for key, value in sorted(payload.items()) if key != "state")
