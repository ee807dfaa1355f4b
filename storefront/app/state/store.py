"""Storefront state container and global store.

`StoreStateMachine` owns the single AppState snapshot. All mutation goes
through `dispatch`, which runs the pure reducer, swaps the snapshot, hands
delayed messages to the scheduler and only then notifies subscribers. There
is no await between reading and writing the snapshot, so every action and
timer completion is applied atomically on the event loop.

`Store` is the service locator UI components use to reach the machine.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union

from storefront.shared.core import events
from storefront.shared.core.configuration import DelayConfig
from storefront.shared.core.event_bus import EventBus, EventPayload
from storefront.shared.core.scheduler import TimerScheduler
from storefront.shared.domain import actions
from storefront.shared.domain.cart.manager import cart_total, unit_count
from storefront.shared.domain.catalog.loader import CatalogLoader
from storefront.shared.domain.catalog.provider import CatalogProvider, MockCatalogProvider
from storefront.shared.domain.effects import Delay
from storefront.shared.domain.errors import ActionRejected, CheckoutFailed
from storefront.shared.domain.models import AppState, CheckoutPhase, Product
from storefront.shared.domain.reducer import initial_state, reduce

logger = logging.getLogger(__name__)


class StoreStateMachine:
    """Holds AppState and exposes the storefront's action handlers."""

    def __init__(
        self,
        event_bus: EventBus,
        delays: Optional[DelayConfig] = None,
        provider: Optional[CatalogProvider] = None,
        scheduler: Optional[TimerScheduler] = None,
    ) -> None:
        """Create the machine with an empty catalog and cart.

        Args:
            event_bus: Shared bus for state notifications and user actions
            delays: Simulated latencies; defaults to 1s / 2s / 3s
            provider: Catalog source; defaults to the demo products
            scheduler: Timer scheduler; one is created if omitted
        """
        self.bus = event_bus
        self.delays = delays or DelayConfig()
        self.scheduler = scheduler or TimerScheduler()
        self.scheduler.bind(self.dispatch)
        self.loader = CatalogLoader(provider or MockCatalogProvider(), self.dispatch)

        self._state: AppState = initial_state()
        self._started = False
        self._torn_down = False

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def total(self) -> Decimal:
        return cart_total(self._state.cart)

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    async def initialize(self) -> None:
        """Subscribe to user actions and start the catalog load.

        Safe to call more than once; only the first call has an effect.
        """
        if self._started:
            return

        await self.bus.subscribe(events.TOPIC_USER_ACTION, self._handle_user_action)
        self._started = True
        await self.loader.load()

    async def teardown(self) -> None:
        """Suppress every pending timer and ignore further actions."""
        if self._torn_down:
            return
        self._torn_down = True
        self.scheduler.cancel_all()
        await self.bus.unsubscribe(events.TOPIC_USER_ACTION, self._handle_user_action)
        logger.info("StoreStateMachine torn down")

    # --- Dispatch ---

    async def dispatch(self, action: actions.Action) -> bool:
        """Apply one action. Returns False if it was rejected or ignored."""
        if self._torn_down:
            logger.debug(f"Dropping {action.type}: state machine torn down")
            return False

        previous = self._state
        try:
            transition = reduce(previous, action)
        except ActionRejected as exc:
            logger.warning(f"Rejected {action.type}: {exc}")
            await self.bus.publish(
                events.TOPIC_ACTION_REJECTED,
                events.create_action_rejected_event(action.type, str(exc)),
            )
            return False

        self._state = transition.state
        for effect in transition.effects:
            self.scheduler.schedule(self._seconds(effect.delay), effect.action)

        if transition.state == previous:
            return False

        logger.debug(f"{action.type}: view={self._state.view.value} loading={self._state.is_loading} "
                     f"cart_lines={len(self._state.cart)} checkout={self._state.checkout.phase.value}")
        await self.bus.publish(
            events.TOPIC_STATE_CHANGED,
            events.create_state_changed_event(self._state, action.type),
        )
        await self._publish_lifecycle(previous, action)
        return True

    def _seconds(self, delay: Delay) -> float:
        if delay is Delay.CATALOG_LOAD:
            return self.delays.catalog_load
        if delay is Delay.CHECKOUT_SUBMIT:
            return self.delays.checkout_submit
        return self.delays.confirmation

    async def _publish_lifecycle(self, previous: AppState, action: actions.Action) -> None:
        state = self._state
        if isinstance(action, actions.CatalogLoaded):
            await self.bus.publish(
                events.TOPIC_CATALOG_LOADED,
                events.create_catalog_loaded_event(len(state.catalog)),
            )
            await self._log(f"Loaded {len(state.catalog)} products")
        elif isinstance(action, actions.CheckoutConfirmed):
            receipt = state.checkout.receipt
            await self.bus.publish(
                events.TOPIC_ORDER_CONFIRMED,
                events.create_order_confirmed_event(receipt.order_id, str(receipt.total), len(receipt.lines)),
            )
            await self._log(
                f"Order #{receipt.order_id} confirmed: {unit_count(receipt.lines)} item(s), total {receipt.total}",
                level="success",
            )
        elif isinstance(action, actions.CheckoutFailedAction):
            await self.bus.publish(
                events.TOPIC_CHECKOUT_FAILED,
                events.create_checkout_failed_event(previous.checkout.order_id, action.reason),
            )
            await self._log(f"Checkout failed: {action.reason}", level="error")

    async def _log(self, message: str, level: str = "info") -> None:
        await self.bus.publish(
            events.TOPIC_LOGS_EVENT,
            events.create_logs_event(message, level=level, topic="store"),
        )

    async def _handle_user_action(self, payload: EventPayload) -> None:
        action = payload.get("action")
        if not isinstance(action, actions.Action):
            logger.warning(f"Ignoring malformed user action payload: {events.describe_payload(payload)}")
            return
        await self.dispatch(action)

    # --- Public Actions ---

    async def select_product(self, product_id: str) -> bool:
        return await self.dispatch(actions.SelectProduct(product_id=product_id))

    async def add_to_cart(self, product: Product, origin: actions.Origin = actions.Origin.GRID) -> bool:
        return await self.dispatch(actions.AddToCart(product=product, origin=origin))

    async def remove_from_cart(self, product_id: str) -> bool:
        return await self.dispatch(actions.RemoveFromCart(product_id=product_id))

    async def set_search_term(self, term: str) -> bool:
        return await self.dispatch(actions.SetSearchTerm(term=term))

    async def go_to_cart(self) -> bool:
        return await self.dispatch(actions.GoToCart())

    async def go_to_catalog(self) -> bool:
        return await self.dispatch(actions.GoToCatalog())

    async def checkout(self) -> bool:
        return await self.dispatch(actions.Checkout())

    async def checkout_failed(self, error: Union[CheckoutFailed, str]) -> bool:
        """Report a failed submission for the order in flight.

        Accepts the CheckoutFailed raised by an order backend, or a bare reason.
        """
        if self._state.checkout.phase is not CheckoutPhase.SUBMITTING:
            return False
        if isinstance(error, CheckoutFailed):
            reason, order_id = error.reason, error.order_id
        else:
            reason, order_id = error, None
        return await self.dispatch(
            actions.CheckoutFailedAction(reason=reason, order_id=order_id or self._state.checkout.order_id)
        )


class Store:
    """Global store for the storefront application.

    Usage:
        # During app initialization
        Store.initialize(event_bus)

        # In any UI component
        machine = Store.get().machine
    """

    _instance: Optional['Store'] = None

    def __init__(self, event_bus: EventBus, **machine_options) -> None:
        """Use Store.initialize() instead of calling this directly."""
        self.machine = StoreStateMachine(event_bus, **machine_options)

    @classmethod
    def initialize(cls, event_bus: EventBus, **machine_options) -> 'Store':
        """Create the global store instance.

        Raises:
            RuntimeError: If the store is already initialized
        """
        if cls._instance is not None:
            raise RuntimeError("Store already initialized!")

        cls._instance = cls(event_bus, **machine_options)
        return cls._instance

    @classmethod
    def get(cls) -> 'Store':
        if cls._instance is None:
            raise RuntimeError("Store not initialized! Call Store.initialize() first.")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the global instance. Primarily used for testing."""
        cls._instance = None
