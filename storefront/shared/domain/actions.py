"""Messages accepted by the reducer.

User actions come from the rendering boundary; timer messages are delivered by
the scheduler once a simulated delay elapses. All are frozen value objects.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict

from .models import Product


class Origin(str, Enum):
    """Screen an add-to-cart was issued from."""
    GRID = "grid"
    DETAIL = "detail"


class Action(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    @property
    def type(self) -> str:
        return type(self).__name__


# --- User actions ---

class SelectProduct(Action):
    product_id: str


class AddToCart(Action):
    product: Product
    origin: Origin = Origin.GRID


class RemoveFromCart(Action):
    product_id: str


class SetSearchTerm(Action):
    term: str


class GoToCart(Action):
    pass


class GoToCatalog(Action):
    pass


class Checkout(Action):
    pass


# --- Loader / backend messages ---

class LoadCatalog(Action):
    products: Tuple[Product, ...]


class CheckoutFailedAction(Action):
    reason: str
    order_id: int | None = None


# --- Timer messages ---

class CatalogLoaded(Action):
    products: Tuple[Product, ...]


class CheckoutConfirmed(Action):
    order_id: int


class ConfirmationDismissed(Action):
    order_id: int


UserAction = Union[SelectProduct, AddToCart, RemoveFromCart, SetSearchTerm, GoToCart, GoToCatalog, Checkout]
