"""
Shared Core Module
==================

Event system, configuration and timer scheduling.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Timers
from .scheduler import TimerScheduler

# Configuration
from .configuration import (
    ConfigManager,
    DelayConfig,
    StorefrontConfig,
    UIConfig,
    ValidationLevel,
    get_config,
    get_config_manager,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Timers
    "TimerScheduler",
    # Configuration
    "ConfigManager",
    "DelayConfig",
    "StorefrontConfig",
    "UIConfig",
    "ValidationLevel",
    "get_config",
    "get_config_manager",
]
