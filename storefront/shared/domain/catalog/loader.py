"""Catalog Loader for the Storefront.

Fetches the product list once and delivers it after the simulated catalog
latency. Loading flips `catalog_loading` on immediately; the delayed
`CatalogLoaded` message installs the products and flips it off in one step.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from storefront.shared.domain.actions import CatalogLoaded, LoadCatalog
from storefront.shared.domain.catalog.provider import CatalogProvider
from storefront.shared.domain.effects import Delay, Schedule, Transition, settle, unchanged
from storefront.shared.domain.errors import CatalogLoadInProgress, CheckoutUnavailable
from storefront.shared.domain.models import AppState, CheckoutPhase

logger = logging.getLogger(__name__)


def begin_load(state: AppState, action: LoadCatalog) -> Transition:
    if state.catalog_loading:
        raise CatalogLoadInProgress()
    if state.checkout.phase is not CheckoutPhase.IDLE:
        # Loading during a checkout would let is_loading and order_complete overlap
        raise CheckoutUnavailable(f"Cannot load catalog while checkout is {state.checkout.phase.value}")

    return settle(
        state.model_copy(update={"catalog_loading": True}),
        Schedule(delay=Delay.CATALOG_LOAD, action=CatalogLoaded(products=action.products)),
    )


def complete_load(state: AppState, action: CatalogLoaded) -> Transition:
    if not state.catalog_loading:
        logger.debug("Ignoring CatalogLoaded with no load pending")
        return unchanged(state)

    update: dict[str, Any] = {"catalog": action.products, "catalog_loading": False}
    # Selection is an id lookup; drop it if the new catalog no longer has it
    if state.selected_product_id is not None and not any(
        p.id == state.selected_product_id for p in action.products
    ):
        update["selected_product_id"] = None
    return settle(state.model_copy(update=update))


class CatalogLoader:
    """Pulls products from the provider and hands them to the state machine."""

    def __init__(self, provider: CatalogProvider, dispatch: Callable[[Any], Awaitable[bool]]):
        self.provider = provider
        self._dispatch = dispatch

    async def load(self) -> bool:
        """Start a catalog load. Returns False if the load was rejected."""
        products = tuple(self.provider.fetch_catalog())
        logger.info(f"CatalogLoader: fetched {len(products)} products, delivering after delay")
        return await self._dispatch(LoadCatalog(products=products))
