"""
Shared Domain Module
====================

AppState, actions, and the transitions owned by each component:
catalog loading, cart management, navigation and checkout.
"""

from storefront.shared.domain.models import AppState, CartLine, CheckoutPhase, OrderReceipt, Product, View
from storefront.shared.domain.reducer import initial_state, reduce

__all__ = [
    "AppState",
    "CartLine",
    "CheckoutPhase",
    "OrderReceipt",
    "Product",
    "View",
    "initial_state",
    "reduce",
]
