"""Storefront exception hierarchy."""


class StorefrontError(Exception):
    """Base class for storefront errors."""


class ActionRejected(StorefrontError):
    """An action is not allowed in the current state; the state is unchanged."""


class ReentrantCheckout(ActionRejected):
    def __init__(self, order_id: int | None = None):
        super().__init__(f"Checkout already in progress (order {order_id})")
        self.order_id = order_id


class EmptyCartCheckout(ActionRejected):
    def __init__(self):
        super().__init__("Cannot check out an empty cart")


class CheckoutUnavailable(ActionRejected):
    """Checkout requested while the store is busy with something else."""


class CatalogLoadInProgress(ActionRejected):
    def __init__(self):
        super().__init__("Catalog load already in progress")


class CheckoutFailed(StorefrontError):
    """An order submission failed. Cart and view are left untouched."""

    def __init__(self, reason: str, order_id: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.order_id = order_id
