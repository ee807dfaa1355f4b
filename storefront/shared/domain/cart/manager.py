"""Cart Manager.

Cart lines are unique by product id and keep insertion order. Quantities only
grow through `add_line`; `remove_line` is the only way a line disappears.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Tuple

from storefront.shared.domain.actions import AddToCart, Origin, RemoveFromCart
from storefront.shared.domain.effects import Transition, settle, unchanged
from storefront.shared.domain.models import AppState, CartLine, Product, View

Cart = Tuple[CartLine, ...]


def add_line(cart: Cart, product: Product) -> Cart:
    """Increment the line for `product`, or append a new line with quantity 1."""
    for index, line in enumerate(cart):
        if line.id == product.id:
            bumped = line.model_copy(update={"quantity": line.quantity + 1})
            return cart[:index] + (bumped,) + cart[index + 1:]
    return cart + (CartLine(product=product, quantity=1),)


def remove_line(cart: Cart, product_id: str) -> Cart:
    """Drop the line for `product_id`; an unknown id leaves the cart as is."""
    if not any(line.id == product_id for line in cart):
        return cart
    return tuple(line for line in cart if line.id != product_id)


def cart_total(cart: Cart) -> Decimal:
    return sum((line.line_total for line in cart), Decimal("0"))


def item_count(cart: Cart) -> int:
    """Number of distinct lines; this is what the header badge shows."""
    return len(cart)


def unit_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart)


def add_to_cart(state: AppState, action: AddToCart) -> Transition:
    update = {"cart": add_line(state.cart, action.product)}
    if action.origin is Origin.DETAIL:
        # The detail screen closes itself after adding; the grid keeps the selection
        update["selected_product_id"] = None
        update["view"] = View.CATALOG
    return settle(state.model_copy(update=update))


def remove_from_cart(state: AppState, action: RemoveFromCart) -> Transition:
    cart = remove_line(state.cart, action.product_id)
    if cart is state.cart:
        return unchanged(state)
    return settle(state.model_copy(update={"cart": cart}))
