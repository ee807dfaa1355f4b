"""Read-only projection of AppState for the rendering boundary."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from storefront.shared.domain.cart.manager import cart_total, item_count
from storefront.shared.domain.models import AppState, CartLine, CheckoutPhase, OrderReceipt, Product, View
from storefront.shared.domain.navigation.navigator import Screen, current_screen, visible_catalog

CHECKOUT_LABEL = "Proceed to Checkout"
CHECKOUT_BUSY_LABEL = "Processing..."


class StoreView(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen: Screen
    products: Tuple[Product, ...]
    search_term: str
    selected: Optional[Product]
    cart: Tuple[CartLine, ...]
    total: Decimal
    badge_count: int
    show_back: bool
    submitting: bool
    checkout_enabled: bool
    checkout_label: str
    receipt: Optional[OrderReceipt]
    checkout_error: Optional[str]


def project(state: AppState) -> StoreView:
    return StoreView(
        screen=current_screen(state),
        products=visible_catalog(state),
        search_term=state.search_term,
        selected=state.selected_product,
        cart=state.cart,
        total=cart_total(state.cart),
        badge_count=item_count(state.cart),
        show_back=state.view is not View.CATALOG,
        submitting=state.checkout.phase is CheckoutPhase.SUBMITTING,
        checkout_enabled=not state.is_loading,
        checkout_label=CHECKOUT_BUSY_LABEL if state.is_loading else CHECKOUT_LABEL,
        receipt=state.checkout.receipt,
        checkout_error=state.checkout.error,
    )
