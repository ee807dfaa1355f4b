"""Console rendering of the storefront with rich.

Pure functions from a StoreView to rich renderables; nothing here touches
the state machine.
"""

from __future__ import annotations

from decimal import Decimal

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from storefront.app.ui.view_model import CHECKOUT_BUSY_LABEL, StoreView
from storefront.shared.core.configuration import UIConfig
from storefront.shared.domain.navigation.navigator import Screen

ACCENT = "green"


class ScreenRenderer:
    """Builds the header and the active screen for a StoreView."""

    def __init__(self, ui: UIConfig | None = None):
        self.ui = ui or UIConfig()

    def money(self, amount: Decimal) -> str:
        return f"{self.ui.currency_symbol}{amount:,.2f}"

    def render(self, view: StoreView) -> RenderableType:
        return Group(self.header(view), self.body(view))

    def header(self, view: StoreView) -> RenderableType:
        title = Text()
        if view.show_back:
            title.append("← ", style="bold")
        title.append(self.ui.title, style=f"bold {ACCENT}")

        right = Text()
        if view.search_term:
            right.append(f"search: {view.search_term!r}  ", style="dim")
        right.append("cart")
        if view.badge_count > 0:
            right.append(f" ({view.badge_count})", style="bold red")

        grid = Table.grid(expand=True)
        grid.add_column()
        grid.add_column(justify="right")
        grid.add_row(title, right)
        return grid

    def body(self, view: StoreView) -> RenderableType:
        if view.screen is Screen.CONFIRMATION:
            return self.confirmation(view)
        if view.screen is Screen.LOADING:
            return Spinner("dots", text=Text(CHECKOUT_BUSY_LABEL if view.submitting else "Loading products..."))
        if view.screen is Screen.DETAIL:
            return self.detail(view)
        if view.screen is Screen.CART:
            return self.cart(view)
        return self.grid(view)

    def grid(self, view: StoreView) -> RenderableType:
        if not view.products:
            return Text("No products match your search.", style="dim")

        cards = []
        for product in view.products:
            card = Text()
            card.append(f"{product.name}\n", style="bold")
            card.append(self.money(product.price), style=f"bold {ACCENT}")
            cards.append(Panel(card, title=product.id, title_align="left", width=32))
        return Columns(cards, width=32)

    def detail(self, view: StoreView) -> RenderableType:
        product = view.selected
        body = Text()
        body.append(f"{self.money(product.price)}\n\n", style=f"bold {ACCENT}")
        body.append(product.description)
        if view.show_back:
            # The detail overlays the cart until it is closed
            body.append("\n\nCart is open underneath: type 'back', then 'cart'.", style="dim")
        return Panel(body, title=product.name, subtitle="add: add to cart | back: close", border_style=ACCENT)

    def cart(self, view: StoreView) -> RenderableType:
        if not view.cart:
            return Panel(
                Text("Your cart is empty.\nAdd some amazing products!", justify="center"),
                border_style="dim",
            )

        table = Table(title="Your Cart", expand=True)
        table.add_column("Product")
        table.add_column("Price", justify="right")
        table.add_column("Qty", justify="right")
        table.add_column("Subtotal", justify="right")
        for line in view.cart:
            table.add_row(line.name, self.money(line.price), str(line.quantity), self.money(line.line_total))

        summary = Table.grid(expand=True)
        summary.add_column()
        summary.add_column(justify="right")
        summary.add_row(f"Items ({view.badge_count})", self.money(view.total))
        summary.add_row(Text("Total", style="bold"), Text(self.money(view.total), style=f"bold {ACCENT}"))
        button_style = f"bold {ACCENT}" if view.checkout_enabled else "dim"
        summary.add_row(Text(f"[{view.checkout_label}]", style=button_style), "")

        parts: list[RenderableType] = [table, Panel(summary, title="Order Summary")]
        if view.checkout_error:
            parts.append(Text(f"Checkout failed: {view.checkout_error}", style="bold red"))
        return Group(*parts)

    def confirmation(self, view: StoreView) -> RenderableType:
        body = Text(justify="center")
        body.append("Order Complete!\n", style=f"bold {ACCENT}")
        body.append("Thank you for your purchase.")
        if view.receipt is not None:
            body.append(f"\nOrder #{view.receipt.order_id}: {self.money(view.receipt.total)}", style="dim")
        return Panel(body, border_style=ACCENT)
