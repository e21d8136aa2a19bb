"""In-memory cart store keyed by pizza and size."""

from __future__ import annotations

import logging
from typing import Iterator

from storefront.config import DEFAULT_SIZE
from storefront.errors import InvalidIndex
from storefront.models import CartLine, LineKey, MenuItem, Size

logger = logging.getLogger(__name__)


def _normalize(key: tuple) -> LineKey:
    pizza_id, size = key
    try:
        return LineKey(pizza_id, Size(size))
    except ValueError as exc:
        raise InvalidIndex(f"Unknown size {size!r}") from exc


class CartStore:
    """Ordered collection of cart lines; the only place cart state changes.

    Lines are kept in an insertion-ordered dict keyed by ``(pizza_id, size)``
    so that adding the same pizza in the same size twice bumps the quantity
    of the existing line instead of creating a duplicate.
    """

    def __init__(self) -> None:
        self._lines: dict[LineKey, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines.values()))

    def __contains__(self, key: object) -> bool:
        try:
            return _normalize(key) in self._lines
        except (InvalidIndex, TypeError, ValueError):
            return False

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        """Total number of pizzas across all lines."""
        return sum(line.quantity for line in self._lines.values())

    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def get(self, key: LineKey) -> CartLine | None:
        return self._lines.get(_normalize(key))

    def key_at(self, position: int) -> LineKey:
        """Resolve a display row number into its line key."""
        keys = list(self._lines)
        if not (0 <= position < len(keys)):
            raise InvalidIndex(f"No cart line at position {position} (cart has {len(keys)} lines)")
        return keys[position]

    def add_item(self, item: MenuItem, size: Size | str = DEFAULT_SIZE) -> CartLine:
        """Add one pizza of the given size, merging into an existing line."""
        size = Size(size)
        key = LineKey(item.id, size)
        line = self._lines.get(key)
        if line is not None:
            line.quantity += 1
            logger.debug("cart_increment pizza_id=%s size=%s quantity=%d", item.id, size.value, line.quantity)
            return line

        # Price is captured now; later menu changes never reprice this line.
        line = CartLine(
            pizza_id=item.id,
            name=item.name,
            size=size,
            quantity=1,
            unit_price=item.price,
        )
        self._lines[key] = line
        logger.debug("cart_add pizza_id=%s size=%s unit_price=%s", item.id, size.value, item.price)
        return line

    def update_quantity(self, key: LineKey, delta: int) -> CartLine | None:
        """Change a line's quantity; lines that drop to zero are removed.

        Returns the updated line, or ``None`` when the line was removed.
        """
        key = _normalize(key)
        line = self._lines.get(key)
        if line is None:
            raise InvalidIndex(f"No cart line for {key.pizza_id!r} ({key.size.value})")

        quantity = line.quantity + delta
        if quantity <= 0:
            del self._lines[key]
            logger.debug("cart_remove pizza_id=%s size=%s", key.pizza_id, key.size.value)
            return None

        line.quantity = quantity
        logger.debug("cart_update pizza_id=%s size=%s quantity=%d", key.pizza_id, key.size.value, quantity)
        return line

    def remove_line(self, key: LineKey) -> CartLine:
        key = _normalize(key)
        line = self._lines.pop(key, None)
        if line is None:
            raise InvalidIndex(f"No cart line for {key.pizza_id!r} ({key.size.value})")
        logger.debug("cart_remove pizza_id=%s size=%s", key.pizza_id, key.size.value)
        return line

    def clear(self) -> None:
        self._lines = {}
        logger.debug("cart_clear")
