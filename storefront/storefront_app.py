"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from storefront.customer_modal import CustomerModal
from storefront.data import SIZE_BY_KEY
from storefront.errors import InvalidIndex, StorefrontError, ValidationError
from storefront.models import CustomerProfile, LineKey, MenuItem
from storefront.rendering import (
    format_cart_line,
    format_cart_summary,
    format_confirmation,
    format_menu_item,
    format_totals,
)
from storefront.session import StorefrontSession

logger = logging.getLogger(__name__)


class StorefrontApp(App):
    """A Textual storefront for browsing the menu and placing pizza orders."""

    TITLE = "Flames Pizzeria"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #menu-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #menu-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #totals {
        height: auto;
        padding: 0 1;
        margin-top: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        height: 4;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    active_pane = reactive("menu")
    menu_selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        Binding("tab", "toggle_pane", "Menu/Cart", priority=True),
        ("up", "move_selection(-1)", "Previous"),
        ("down", "move_selection(1)", "Next"),
        Binding("ctrl+s", "place_order", "Place order", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: StorefrontSession) -> None:
        super().__init__()
        self.session = session
        self.menu_loading = False
        self.menu_error = ""
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="menu-pane"):
                yield Static("Menu", classes="pane-title")
                yield Static("Loading menu…", id="menu-list")
            with Vertical(id="cart-pane"):
                yield Static("Your Order", classes="pane-title")
                yield Static("Your cart is empty.", id="cart-list")
                yield Static(id="totals")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._refresh_all()
        self.run_worker(self.load_menu(), group="menu", exclusive=True)

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, CustomerModal):
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        handled = True
        if key == "j":
            self.action_move_selection(1)
        elif key == "k":
            self.action_move_selection(-1)
        elif key == "c":
            self._open_customer_modal()
        elif key == "r":
            self.run_worker(self.load_menu(), group="menu", exclusive=True)
        elif key == "s":
            self.run_worker(self.seed_menu(), group="menu", exclusive=True)
        elif self.active_pane == "menu" and key in SIZE_BY_KEY:
            self._add_selected_pizza(key)
        elif self.active_pane == "cart" and key in {"+", "="}:
            self._change_selected_quantity(1)
        elif self.active_pane == "cart" and key in {"-", "_"}:
            self._change_selected_quantity(-1)
        elif self.active_pane == "cart" and key == "d":
            self._remove_selected_line()
        else:
            handled = False

        if handled:
            event.stop()

    def action_toggle_pane(self) -> None:
        if isinstance(self.screen, CustomerModal):
            self.screen.action_move_field(1)
            return
        self.active_pane = "cart" if self.active_pane == "menu" else "menu"
        if self.active_pane == "cart" and self.cart_selected_index is None and len(self.session.cart):
            self.cart_selected_index = 0
        self._refresh_all()

    def action_move_selection(self, delta: int) -> None:
        if isinstance(self.screen, CustomerModal):
            return
        if self.active_pane == "menu":
            menu = self.session.menu
            if not menu:
                return
            self.menu_selected_index = (self.menu_selected_index + delta) % len(menu)
            self._refresh_menu()
            return

        total = len(self.session.cart)
        if not total:
            return
        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else total - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % total
        self._refresh_cart()

    def action_place_order(self) -> None:
        if isinstance(self.screen, CustomerModal):
            return
        if self.session.submitting:
            self.system_status = "Order submission already in progress"
            self._refresh_status()
            return
        self.run_worker(self.place_order(), group="order")

    async def load_menu(self) -> None:
        self.menu_loading = True
        self.menu_error = ""
        self._refresh_menu()
        try:
            await self.session.reload_menu()
        except StorefrontError as exc:
            self.menu_error = str(exc)
        finally:
            self.menu_loading = False
        self.menu_selected_index = 0
        self._refresh_menu()

    async def seed_menu(self) -> None:
        if self.session.menu or self.menu_loading:
            return
        try:
            await self.session.seed_menu()
        except StorefrontError as exc:
            self.system_status = str(exc)
        else:
            self.menu_error = ""
        self.menu_selected_index = 0
        self._refresh_all()

    async def place_order(self) -> None:
        logger.debug("place_order_enter rows=%d screen=%s", len(self.session.cart), type(self.screen).__name__)
        self.system_status = "Placing…"
        self._refresh_status()
        try:
            confirmation = await self.session.place_order()
        except ValidationError as exc:
            if exc.fields:
                self.system_status = "Please fill in name, phone, and address (press C)"
            else:
                self.system_status = "Your cart is empty"
        except StorefrontError as exc:
            self.system_status = str(exc)
        else:
            self.system_status = format_confirmation(confirmation)
            self.cart_selected_index = None
        self._refresh_all()

    def _add_selected_pizza(self, key: str) -> None:
        item = self._selected_menu_item()
        if item is None:
            return
        self.session.cart.add_item(item, SIZE_BY_KEY[key])
        self._refresh_cart()

    def _selected_cart_key(self) -> LineKey | None:
        if self.cart_selected_index is None:
            return None
        try:
            return self.session.cart.key_at(self.cart_selected_index)
        except InvalidIndex:
            self.cart_selected_index = None
            return None

    def _change_selected_quantity(self, delta: int) -> None:
        key = self._selected_cart_key()
        if key is None:
            return
        self.session.cart.update_quantity(key, delta)
        self._refresh_cart()

    def _remove_selected_line(self) -> None:
        key = self._selected_cart_key()
        if key is None:
            return
        self.session.cart.remove_line(key)
        self._refresh_cart()

    def _selected_menu_item(self) -> MenuItem | None:
        menu = self.session.menu
        if not (0 <= self.menu_selected_index < len(menu)):
            return None
        return menu[self.menu_selected_index]

    def _open_customer_modal(self) -> None:
        self.push_screen(CustomerModal(self.session.customer), self._apply_customer)

    def _apply_customer(self, customer: CustomerProfile | None) -> None:
        if customer is None:
            return
        profile = self.session.customer
        profile.name, profile.phone, profile.address = customer.name, customer.phone, customer.address
        self.system_status = "Delivery details saved"
        self._refresh_status()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_all(self) -> None:
        self._refresh_menu()
        self._refresh_cart()
        self._refresh_status()

    def _refresh_menu(self) -> None:
        try:
            menu_widget = self.query_one("#menu-list", Static)
        except NoMatches:
            return
        if self.menu_loading:
            menu_widget.update("Loading menu…")
            return
        if self.menu_error:
            menu_widget.update(Text(self.menu_error, style="red"))
            return
        menu = self.session.menu
        if not menu:
            menu_widget.update("No pizzas yet. Press S to add samples.")
            return

        # Each menu row spans two lines (name + description).
        visible_rows = max(1, self._visible_rows(menu_widget) // 2)
        start, end = self._window_bounds(len(menu), visible_rows, self.menu_selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            selected = idx == self.menu_selected_index and self.active_pane == "menu"
            lines.append("➤ " if selected else "  ")
            lines.append_text(format_menu_item(menu[idx]))
        if end < len(menu):
            lines.append("\n⋮", style="dim")

        menu_widget.update(lines)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
            totals_widget = self.query_one("#totals", Static)
        except NoMatches:
            return

        cart = self.session.cart
        totals = self.session.totals()
        self.sub_title = format_cart_summary(cart.item_count, totals)

        if cart.is_empty:
            self.cart_selected_index = None
            cart_widget.update("Your cart is empty.")
            totals_widget.update("")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(cart):
            self.cart_selected_index = len(cart) - 1

        visible_rows = max(1, self._visible_rows(cart_widget) // 2)
        lines_in_cart = cart.lines()
        start, end = self._window_bounds(len(lines_in_cart), visible_rows, self.cart_selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            selected = idx == self.cart_selected_index and self.active_pane == "cart"
            lines.append("➤ " if selected else "  ")
            lines.append_text(format_cart_line(lines_in_cart[idx]))
        if end < len(lines_in_cart):
            lines.append("\n⋮", style="dim")

        cart_widget.update(lines)
        totals_widget.update(format_totals(totals))

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        if self.active_pane == "menu":
            hint = "1/2/3 add Small/Medium/Large · R refresh · Tab cart · C details · Ctrl+S order"
        else:
            hint = "+/- quantity · D remove · Tab menu · C details · Ctrl+S order"
        status = self.system_status or f"Backend: {self.session.client.base_url}"
        bar.update(f"{hint}\n{status}")
