"""Shared fixtures for storefront tests."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Tuple

import pytest
import pytest_asyncio

from storefront.app.state.store import Store, StoreStateMachine
from storefront.shared.core.configuration import DelayConfig
from storefront.shared.core.event_bus import EventBus
from storefront.shared.core.scheduler import TimerScheduler
from storefront.shared.domain.catalog.provider import MOCK_PRODUCTS, MockCatalogProvider
from storefront.shared.domain.models import AppState, Product


class ManualScheduler(TimerScheduler):
    """Scheduler whose timers only fire when the test says so."""

    def __init__(self) -> None:
        super().__init__()
        self.queue: List[Tuple[float, Any]] = []

    @property
    def pending(self) -> int:
        return len(self.queue)

    def schedule(self, delay: float, message: Any):
        if self.closed:
            return None
        self.queue.append((delay, message))
        return None

    def cancel_all(self) -> int:
        cancelled = len(self.queue)
        self.queue.clear()
        self._closed = True
        return cancelled

    async def fire_next(self) -> Any:
        """Deliver the oldest pending message and return it."""
        delay, message = self.queue.pop(0)
        await self._sink(message)
        return message


@pytest.fixture
def products() -> Tuple[Product, ...]:
    return MOCK_PRODUCTS


@pytest.fixture
def laptop(products) -> Product:
    return products[0]


@pytest.fixture
def mouse(products) -> Product:
    return products[1]


@pytest.fixture
def cheap_product() -> Product:
    return Product(id="cheap", name="Cable", price=Decimal("0.10"))


@pytest.fixture
def loaded_state(products) -> AppState:
    return AppState(catalog=products)


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def provider() -> MockCatalogProvider:
    return MockCatalogProvider()


@pytest_asyncio.fixture
async def event_bus():
    bus = EventBus()
    yield bus
    await bus.wait_until_idle(timeout=1.0)
    await bus.close()


@pytest_asyncio.fixture
async def machine(event_bus, manual_scheduler, provider):
    """A state machine with a loaded catalog and manually driven timers."""
    sm = StoreStateMachine(event_bus, provider=provider, scheduler=manual_scheduler)
    await sm.initialize()
    await manual_scheduler.fire_next()  # CatalogLoaded
    yield sm
    await sm.teardown()


@pytest.fixture
def fast_delays() -> DelayConfig:
    return DelayConfig(catalog_load_ms=10, checkout_submit_ms=20, confirmation_ms=30)


@pytest.fixture(autouse=True)
def reset_store():
    Store.reset()
    yield
    Store.reset()
