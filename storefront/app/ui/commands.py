"""Typed console commands to storefront actions."""

from __future__ import annotations

import shlex
from typing import Optional

from storefront.shared.domain import actions
from storefront.shared.domain.models import AppState

HELP = """\
Commands:
  search [term]     filter products by name (no term clears the filter)
  view <id>         open a product's detail screen
  add [id]          add a product; without an id, adds the product on screen
  remove <id>       remove a product from the cart
  cart              show the cart
  back | catalog    return to the product grid
  checkout          place the order
  help              show this message
  quit              exit"""

QUIT_COMMANDS = frozenset({"quit", "exit", "q"})


class CommandError(ValueError):
    """The typed command could not be turned into an action."""


def parse_command(text: str, state: AppState) -> Optional[actions.UserAction]:
    """Translate one line of input. Returns None for blank input."""
    try:
        parts = shlex.split(text)
    except ValueError as exc:
        raise CommandError(str(exc)) from exc
    if not parts:
        return None

    verb, args = parts[0].lower(), parts[1:]

    if verb == "search":
        return actions.SetSearchTerm(term=" ".join(args))
    if verb == "view":
        return actions.SelectProduct(product_id=_single_arg(verb, args))
    if verb == "add":
        return _add(args, state)
    if verb == "remove":
        return actions.RemoveFromCart(product_id=_single_arg(verb, args))
    if verb == "cart":
        return actions.GoToCart()
    if verb in ("back", "catalog"):
        return actions.GoToCatalog()
    if verb == "checkout":
        return actions.Checkout()
    raise CommandError(f"Unknown command '{verb}'. Type 'help' for a list.")


def _single_arg(verb: str, args: list[str]) -> str:
    if len(args) != 1:
        raise CommandError(f"Usage: {verb} <product id>")
    return args[0]


def _add(args: list[str], state: AppState) -> actions.AddToCart:
    if not args:
        product = state.selected_product
        if product is None:
            raise CommandError("No product open; use 'add <product id>'")
        return actions.AddToCart(product=product, origin=actions.Origin.DETAIL)

    product_id = _single_arg("add", args)
    product = state.find_product(product_id)
    if product is None:
        raise CommandError(f"Unknown product '{product_id}'")
    return actions.AddToCart(product=product, origin=actions.Origin.GRID)
