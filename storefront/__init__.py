"""Storefront - client-side shop demo built around a single state machine."""

from .shared.core.event_bus import EventBus

__version__ = "0.1.0"

__all__ = ["EventBus"]
