"""Tests for view navigation, selection and search."""

from decimal import Decimal

from storefront.shared.domain.actions import GoToCart, GoToCatalog, SelectProduct, SetSearchTerm
from storefront.shared.domain.models import AppState, CheckoutPhase, CheckoutState, Product, View
from storefront.shared.domain.navigation.navigator import (
    Screen,
    current_screen,
    filter_catalog,
    visible_catalog,
)
from storefront.shared.domain.reducer import reduce


class TestViewSwitching:

    def test_initial_state(self):
        state = AppState()

        assert state.view is View.CATALOG
        assert state.catalog == ()
        assert state.cart == ()
        assert state.selected_product is None
        assert not state.is_loading
        assert not state.order_complete

    def test_go_to_cart_keeps_selection(self, loaded_state):
        state = reduce(loaded_state, SelectProduct(product_id="prod4")).state

        state = reduce(state, GoToCart()).state

        assert state.view is View.CART
        assert state.selected_product_id == "prod4"

    def test_go_to_catalog_clears_selection(self, loaded_state):
        state = reduce(loaded_state, GoToCart()).state
        state = reduce(state, SelectProduct(product_id="prod4")).state

        state = reduce(state, GoToCatalog()).state

        assert state.view is View.CATALOG
        assert state.selected_product_id is None


class TestSelection:

    def test_select_does_not_change_view(self, loaded_state):
        state = reduce(loaded_state, SelectProduct(product_id="prod3")).state

        assert state.view is View.CATALOG
        assert state.selected_product.name == "Mechanical Keyboard"

    def test_unknown_product_is_ignored(self, loaded_state):
        transition = reduce(loaded_state, SelectProduct(product_id="ghost"))

        assert transition.state == loaded_state

    def test_stale_selection_resolves_to_none(self, loaded_state):
        state = loaded_state.model_copy(update={"selected_product_id": "prod1", "catalog": loaded_state.catalog[1:]})

        assert state.selected_product is None
        assert current_screen(state) is Screen.GRID


class TestSearch:

    def test_lap_matches_modern_laptop(self, loaded_state):
        state = reduce(loaded_state, SetSearchTerm(term="lap")).state

        assert [p.name for p in visible_catalog(state)] == ["Modern Laptop"]

    def test_match_is_case_insensitive(self, products):
        assert [p.id for p in filter_catalog(products, "MOUSE")] == ["prod2"]
        assert [p.id for p in filter_catalog(products, "e")] == [p.id for p in products if "e" in p.name.lower()]

    def test_empty_term_shows_everything(self, products):
        assert filter_catalog(products, "") == products

    def test_no_match(self, loaded_state):
        state = reduce(loaded_state, SetSearchTerm(term="toaster")).state

        assert visible_catalog(state) == ()

    def test_search_never_mutates_catalog(self, loaded_state):
        state = reduce(loaded_state, SetSearchTerm(term="web")).state

        assert state.catalog == loaded_state.catalog
        assert len(state.catalog) == 6
        assert state.search_term == "web"

    def test_filter_follows_catalog_changes(self):
        state = AppState(search_term="pen")
        assert visible_catalog(state) == ()

        state = state.model_copy(update={"catalog": (Product(id="p", name="Pen", price=Decimal("1")),)})

        assert [p.id for p in visible_catalog(state)] == ["p"]


class TestScreenPrecedence:

    def test_grid_by_default(self, loaded_state):
        assert current_screen(loaded_state) is Screen.GRID

    def test_cart_view(self, loaded_state):
        assert current_screen(loaded_state.model_copy(update={"view": View.CART})) is Screen.CART

    def test_detail_overlays_cart(self, loaded_state):
        state = loaded_state.model_copy(update={"view": View.CART, "selected_product_id": "prod1"})

        assert current_screen(state) is Screen.DETAIL

    def test_loading_beats_detail(self, loaded_state):
        state = loaded_state.model_copy(update={"catalog_loading": True, "selected_product_id": "prod1"})

        assert current_screen(state) is Screen.LOADING

    def test_submitting_shows_loading(self, loaded_state):
        state = loaded_state.model_copy(update={
            "view": View.CART,
            "checkout": CheckoutState(phase=CheckoutPhase.SUBMITTING, order_id=1),
        })

        assert state.is_loading
        assert current_screen(state) is Screen.LOADING

    def test_confirmation_beats_everything(self, loaded_state):
        state = loaded_state.model_copy(update={
            "view": View.CART,
            "selected_product_id": "prod1",
            "checkout": CheckoutState(phase=CheckoutPhase.CONFIRMED, order_id=1),
        })

        assert state.order_complete
        assert not state.is_loading
        assert current_screen(state) is Screen.CONFIRMATION
