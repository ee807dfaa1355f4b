"""Navigator: view switching, product selection and search.

The visible catalog and the current screen are derived on every read and
never written back into the state.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence, Tuple

from storefront.shared.domain.actions import GoToCart, GoToCatalog, SelectProduct, SetSearchTerm
from storefront.shared.domain.effects import Transition, settle, unchanged
from storefront.shared.domain.models import AppState, Product, View

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    """What the rendering boundary shows, in precedence order."""
    CONFIRMATION = "confirmation"
    LOADING = "loading"
    DETAIL = "detail"
    CART = "cart"
    GRID = "grid"


def go_to_cart(state: AppState, action: GoToCart) -> Transition:
    return settle(state.model_copy(update={"view": View.CART}))


def go_to_catalog(state: AppState, action: GoToCatalog) -> Transition:
    return settle(state.model_copy(update={"view": View.CATALOG, "selected_product_id": None}))


def select_product(state: AppState, action: SelectProduct) -> Transition:
    if state.find_product(action.product_id) is None:
        logger.debug(f"Ignoring selection of unknown product '{action.product_id}'")
        return unchanged(state)
    return settle(state.model_copy(update={"selected_product_id": action.product_id}))


def set_search_term(state: AppState, action: SetSearchTerm) -> Transition:
    return settle(state.model_copy(update={"search_term": action.term}))


def filter_catalog(catalog: Sequence[Product], term: str) -> Tuple[Product, ...]:
    """Case-insensitive substring match on product name."""
    needle = term.lower()
    return tuple(product for product in catalog if needle in product.name.lower())


def visible_catalog(state: AppState) -> Tuple[Product, ...]:
    return filter_catalog(state.catalog, state.search_term)


def current_screen(state: AppState) -> Screen:
    if state.order_complete:
        return Screen.CONFIRMATION
    if state.is_loading:
        return Screen.LOADING
    if state.selected_product is not None:
        return Screen.DETAIL
    if state.view is View.CART:
        return Screen.CART
    return Screen.GRID
