"""Checkout Flow: IDLE → SUBMITTING → CONFIRMED → IDLE.

Each order gets an id from `order_sequence`; both timer messages carry it, and
a message for any other order is dropped. That is what keeps a second
checkout click (or a failed order) from producing a second confirmation.
"""

from __future__ import annotations

import logging

from storefront.shared.domain.actions import (
    Checkout,
    CheckoutConfirmed,
    CheckoutFailedAction,
    ConfirmationDismissed,
)
from storefront.shared.domain.cart.manager import cart_total
from storefront.shared.domain.effects import Delay, Schedule, Transition, settle, unchanged
from storefront.shared.domain.errors import (
    CheckoutUnavailable,
    EmptyCartCheckout,
    ReentrantCheckout,
)
from storefront.shared.domain.models import AppState, CheckoutPhase, CheckoutState, OrderReceipt, View

logger = logging.getLogger(__name__)


def submit(state: AppState, action: Checkout) -> Transition:
    phase = state.checkout.phase
    if phase is CheckoutPhase.SUBMITTING:
        raise ReentrantCheckout(state.checkout.order_id)
    if phase is CheckoutPhase.CONFIRMED:
        raise CheckoutUnavailable(f"Order {state.checkout.order_id} is still being confirmed")
    if state.is_loading:
        raise CheckoutUnavailable("Checkout is disabled while the catalog is loading")
    if not state.cart:
        raise EmptyCartCheckout()

    order_id = state.order_sequence + 1
    receipt = OrderReceipt(order_id=order_id, lines=state.cart, total=cart_total(state.cart))
    logger.info(f"Submitting order {order_id}: {len(state.cart)} line(s), total {receipt.total}")

    return settle(
        state.model_copy(update={
            "order_sequence": order_id,
            "checkout": CheckoutState(phase=CheckoutPhase.SUBMITTING, order_id=order_id, receipt=receipt),
        }),
        Schedule(delay=Delay.CHECKOUT_SUBMIT, action=CheckoutConfirmed(order_id=order_id)),
    )


def confirm(state: AppState, action: CheckoutConfirmed) -> Transition:
    checkout = state.checkout
    if checkout.phase is not CheckoutPhase.SUBMITTING or checkout.order_id != action.order_id:
        logger.debug(f"Dropping stale confirmation for order {action.order_id}")
        return unchanged(state)

    return settle(
        state.model_copy(update={
            "cart": (),
            "checkout": checkout.model_copy(update={"phase": CheckoutPhase.CONFIRMED}),
        }),
        Schedule(delay=Delay.CONFIRMATION, action=ConfirmationDismissed(order_id=action.order_id)),
    )


def dismiss(state: AppState, action: ConfirmationDismissed) -> Transition:
    checkout = state.checkout
    if checkout.phase is not CheckoutPhase.CONFIRMED or checkout.order_id != action.order_id:
        logger.debug(f"Dropping stale dismissal for order {action.order_id}")
        return unchanged(state)

    return settle(state.model_copy(update={
        "view": View.CATALOG,
        "checkout": CheckoutState(receipt=checkout.receipt),
    }))


def fail(state: AppState, action: CheckoutFailedAction) -> Transition:
    """Abort a submission. Cart and view stay as they were."""
    checkout = state.checkout
    if checkout.phase is not CheckoutPhase.SUBMITTING:
        logger.debug("Ignoring checkout failure with no submission in flight")
        return unchanged(state)
    if action.order_id is not None and action.order_id != checkout.order_id:
        logger.debug(f"Ignoring failure for superseded order {action.order_id}")
        return unchanged(state)

    logger.warning(f"Order {checkout.order_id} failed: {action.reason}")
    return settle(state.model_copy(update={
        "checkout": CheckoutState(error=action.reason),
    }))
