"""Reducer output: the next state plus delayed messages to schedule."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from .actions import Action
from .models import AppState


class Delay(str, Enum):
    """Named simulated latencies; durations come from DelayConfig."""
    CATALOG_LOAD = "catalog_load"
    CHECKOUT_SUBMIT = "checkout_submit"
    CONFIRMATION = "confirmation"


class Schedule(BaseModel):
    """Deliver `action` back to the reducer once `delay` has elapsed."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    delay: Delay
    action: Action


class Transition(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    state: AppState
    effects: Tuple[Schedule, ...] = ()


def unchanged(state: AppState) -> Transition:
    return Transition(state=state)


def settle(state: AppState, *effects: Schedule) -> Transition:
    return Transition(state=state, effects=effects)
