"""Rendering helpers for menu rows, cart lines and totals."""

from __future__ import annotations

from rich.text import Text

from storefront.models import CartLine, MenuItem, OrderConfirmation, Totals
from storefront.pricing import format_money


def badge_style(tag: str) -> str:
    """Return a consistent badge style for menu tags."""
    if tag == "Spicy":
        return "bold #ffffff on #c2410c"
    return "bold #0b1f0f on #5fbf72"


def menu_tags(item: MenuItem) -> list[str]:
    tags: list[str] = []
    if item.vegetarian:
        tags.append("Veg")
    if item.spicy:
        tags.append("Spicy")
    return tags


def format_menu_item(item: MenuItem) -> Text:
    """Render a menu row: name, price and colored tags."""
    text = Text()
    text.append(item.name, style="bold")
    text.append(f"  {format_money(item.price)}", style="#e11d48")
    for tag in menu_tags(item):
        text.append(" ")
        text.append(f" {tag} ", style=badge_style(tag))
    if item.description:
        text.append(f"\n    {item.description}", style="dim")
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(f"{line.name} • {line.size.value}")
    text.append(f"\n    {format_money(line.unit_price)} × {line.quantity}", style="dim")
    return text


def format_totals(totals: Totals) -> Text:
    text = Text()
    text.append(f"Subtotal  {format_money(totals.subtotal)}\n")
    text.append(f"Tax       {format_money(totals.tax)}\n")
    text.append(f"Total     {format_money(totals.total)}", style="bold")
    return text


def format_cart_summary(item_count: int, totals: Totals) -> str:
    """Header summary, e.g. ``Cart: 2 items · $23.74``."""
    return f"Cart: {item_count} items · {format_money(totals.total)}"


def format_confirmation(confirmation: OrderConfirmation) -> str:
    return f"Order placed! ID: {confirmation.id} · Total charged {format_money(confirmation.total)}"
