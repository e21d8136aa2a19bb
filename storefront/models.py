"""Domain models for the storefront."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, NamedTuple


class Size(str, Enum):
    """Pizza sizes offered on every menu item."""

    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


def to_money(value: Any) -> Decimal:
    """Convert a JSON number or string into an exact Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid money value: {value!r}")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid money value: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Invalid money value: {value!r}")
    return amount


@dataclass(frozen=True)
class MenuItem:
    """A pizza as published by the menu endpoint."""

    id: str | int
    name: str
    price: Decimal
    description: str = ""
    vegetarian: bool = False
    spicy: bool = False
    image_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuItem:
        """Build a menu item from a backend record, rejecting incomplete ones."""
        if not isinstance(data, dict):
            raise ValueError(f"Menu record must be an object, got {type(data).__name__}")
        for required in ("id", "name", "price"):
            if data.get(required) is None:
                raise ValueError(f"Menu record missing {required!r}")
        return cls(
            id=data["id"],
            name=str(data["name"]),
            price=to_money(data["price"]),
            description=str(data.get("description") or ""),
            vegetarian=bool(data.get("vegetarian", False)),
            spicy=bool(data.get("spicy", False)),
            image_url=data.get("image_url") or None,
        )


class LineKey(NamedTuple):
    """Identity of a cart line: one line per pizza and size."""

    pizza_id: str | int
    size: Size


@dataclass
class CartLine:
    """One aggregated cart entry for a pizza/size combination."""

    pizza_id: str | int
    name: str
    size: Size
    quantity: int
    unit_price: Decimal
    toppings: list[str] = field(default_factory=list)

    @property
    def key(self) -> LineKey:
        return LineKey(self.pizza_id, self.size)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_payload(self) -> dict[str, Any]:
        """Serialize in the exact shape the order endpoint expects."""
        return {
            "pizza_id": self.pizza_id,
            "name": self.name,
            "size": self.size.value,
            "quantity": self.quantity,
            "unit_price": float(self.unit_price),
            "toppings": list(self.toppings),
        }


@dataclass
class CustomerProfile:
    """Delivery details entered by the customer."""

    name: str = ""
    phone: str = ""
    address: str = ""

    def missing_fields(self) -> list[str]:
        """Return the names of fields that are empty or whitespace only."""
        return [f.name for f in fields(self) if not getattr(self, f.name).strip()]


@dataclass(frozen=True)
class Totals:
    """Derived monetary totals for a cart, rounded to cents."""

    subtotal: Decimal
    tax: Decimal
    total: Decimal


@dataclass(frozen=True)
class OrderConfirmation:
    """Backend acknowledgement of a placed order."""

    id: str | int
    total: Decimal
