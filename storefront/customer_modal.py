"""Delivery details entry modal screen."""

from __future__ import annotations

from dataclasses import replace

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from storefront.models import CustomerProfile

_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "Full name"),
    ("phone", "Phone"),
    ("address", "Delivery address"),
)


class CustomerModal(ModalScreen[CustomerProfile | None]):
    """Edit name, phone and address; dismisses with the edited profile or None."""

    CSS = """
    CustomerModal {
        align: center middle;
        background: $background 60%;
    }

    #customer-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #customer-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #customer-fields {
        color: white;
        margin-bottom: 1;
    }

    #customer-help {
        color: #dddddd;
    }
    """

    BINDINGS = [
        ("up", "move_field(-1)", "Previous field"),
        ("down", "move_field(1)", "Next field"),
        ("shift+tab", "move_field(-1)", "Previous field"),
    ]

    def __init__(self, customer: CustomerProfile) -> None:
        super().__init__()
        self.draft = replace(customer)
        self.field_index = 0

    @property
    def current_field(self) -> str:
        return _FIELDS[self.field_index][0]

    def compose(self) -> ComposeResult:
        with Container(id="customer-dialog"):
            yield Static("Delivery Details", id="customer-title")
            yield Static(id="customer-fields")
            yield Static("Tab/↑/↓ switch field. Enter save. Esc/Ctrl+C cancel.", id="customer-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self._confirm()
            event.stop()
            return

        if event.key == "backspace":
            value = getattr(self.draft, self.current_field)
            if value:
                setattr(self.draft, self.current_field, value[:-1])
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            value = getattr(self.draft, self.current_field)
            setattr(self.draft, self.current_field, value + event.character)
            self._refresh_content()
            event.stop()

    def action_move_field(self, delta: int) -> None:
        self.field_index = (self.field_index + delta) % len(_FIELDS)
        self._refresh_content()

    def _confirm(self) -> None:
        # Completeness is enforced when the order is placed, not here.
        self.dismiss(self.draft)

    def _refresh_content(self) -> None:
        fields_widget = self.query_one("#customer-fields", Static)

        content = Text()
        for idx, (name, label) in enumerate(_FIELDS):
            if idx > 0:
                content.append("\n")
            active = idx == self.field_index
            pointer = "➤ " if active else "  "
            value = getattr(self.draft, name)
            content.append(f"{pointer}{label}: ", style="bold white" if active else "white")
            content.append(value + ("|" if active else ""), style="white")

        fields_widget.update(content)
