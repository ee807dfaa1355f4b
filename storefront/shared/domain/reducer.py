"""Pure transition function `(state, action) -> Transition`.

Each component owns the transitions for its slice of AppState; this module
only routes. Rejections surface as `ActionRejected` and leave the input state
untouched (it is immutable).
"""

from __future__ import annotations

from typing import Callable, Dict, Type

from storefront.shared.domain import actions
from storefront.shared.domain.cart import manager as cart
from storefront.shared.domain.catalog import loader as catalog
from storefront.shared.domain.checkout import flow as checkout
from storefront.shared.domain.effects import Transition
from storefront.shared.domain.models import AppState
from storefront.shared.domain.navigation import navigator

Handler = Callable[[AppState, actions.Action], Transition]

HANDLERS: Dict[Type[actions.Action], Handler] = {
    # Navigator
    actions.SelectProduct: navigator.select_product,
    actions.SetSearchTerm: navigator.set_search_term,
    actions.GoToCart: navigator.go_to_cart,
    actions.GoToCatalog: navigator.go_to_catalog,
    # CartManager
    actions.AddToCart: cart.add_to_cart,
    actions.RemoveFromCart: cart.remove_from_cart,
    # CatalogLoader
    actions.LoadCatalog: catalog.begin_load,
    actions.CatalogLoaded: catalog.complete_load,
    # CheckoutFlow
    actions.Checkout: checkout.submit,
    actions.CheckoutConfirmed: checkout.confirm,
    actions.ConfirmationDismissed: checkout.dismiss,
    actions.CheckoutFailedAction: checkout.fail,
}


def initial_state() -> AppState:
    return AppState()


def reduce(state: AppState, action: actions.Action) -> Transition:
    try:
        handler = HANDLERS[type(action)]
    except KeyError:
        raise TypeError(f"No transition registered for {type(action).__name__}") from None
    return handler(state, action)
