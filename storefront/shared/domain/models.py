"""Immutable state snapshots for the storefront.

Every model is frozen; transitions build new snapshots with `model_copy`.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt


class View(str, Enum):
    """Top-level screen selector. The product detail is an overlay, not a view."""
    CATALOG = "catalog"
    CART = "cart"


class CheckoutPhase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    image_url: str = ""


class CartLine(BaseModel):
    """One product-quantity pair. Exposes the product's fields directly."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    product: Product
    quantity: PositiveInt = 1

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def description(self) -> str:
        return self.product.description

    @property
    def price(self) -> Decimal:
        return self.product.price

    @property
    def image_url(self) -> str:
        return self.product.image_url

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


class OrderReceipt(BaseModel):
    """What was ordered, captured when the order is submitted."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    order_id: PositiveInt
    lines: Tuple[CartLine, ...]
    total: Decimal


class CheckoutState(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    phase: CheckoutPhase = CheckoutPhase.IDLE
    # Order the pending timer messages belong to
    order_id: Optional[int] = None
    receipt: Optional[OrderReceipt] = None
    error: Optional[str] = None


class AppState(BaseModel):
    """Single source of truth for the storefront."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    catalog: Tuple[Product, ...] = ()
    cart: Tuple[CartLine, ...] = ()
    view: View = View.CATALOG
    selected_product_id: Optional[str] = None
    search_term: str = ""
    catalog_loading: bool = False
    checkout: CheckoutState = Field(default_factory=CheckoutState)
    order_sequence: NonNegativeInt = 0

    @property
    def is_loading(self) -> bool:
        return self.catalog_loading or self.checkout.phase is CheckoutPhase.SUBMITTING

    @property
    def order_complete(self) -> bool:
        return self.checkout.phase is CheckoutPhase.CONFIRMED

    @property
    def selected_product(self) -> Optional[Product]:
        """Resolve the selection against the catalog; a stale id is no selection."""
        if self.selected_product_id is None:
            return None
        return self.find_product(self.selected_product_id)

    def find_product(self, product_id: str) -> Optional[Product]:
        for product in self.catalog:
            if product.id == product_id:
                return product
        return None
