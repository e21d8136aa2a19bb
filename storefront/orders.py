"""Order placement: validation, payload mapping and response handling."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from storefront.cart import CartStore
from storefront.errors import SubmissionError, SubmissionInProgress, ValidationError
from storefront.models import CartLine, CustomerProfile, OrderConfirmation, to_money

logger = logging.getLogger(__name__)


class OrderTransport(Protocol):
    async def submit_order(self, payload: dict[str, Any]) -> dict[str, Any]: ...


def build_order_payload(customer: CustomerProfile, lines: Iterable[CartLine]) -> dict[str, Any]:
    """Build the order request body. Totals are left to the backend."""
    return {
        "customer_name": customer.name,
        "phone": customer.phone,
        "address": customer.address,
        "items": [line.to_payload() for line in lines],
    }


def parse_confirmation(data: dict[str, Any]) -> OrderConfirmation:
    """Map a successful order response into a confirmation."""
    order_id = data.get("id")
    if order_id is None or order_id == "":
        raise SubmissionError("Failed to place order (response has no order id)")
    try:
        total = to_money(data.get("total"))
    except ValueError as exc:
        raise SubmissionError("Failed to place order (response has no valid total)") from exc
    return OrderConfirmation(id=order_id, total=total)


class OrderSubmitter:
    """Places orders for one session and refuses overlapping submissions."""

    def __init__(self, transport: OrderTransport) -> None:
        self._transport = transport
        self.submitting = False

    def validate(self, customer: CustomerProfile, cart: CartStore) -> None:
        missing = customer.missing_fields()
        if missing:
            raise ValidationError("missing customer fields", fields=missing)
        if cart.is_empty:
            raise ValidationError("empty cart")

    async def place_order(self, customer: CustomerProfile, cart: CartStore) -> OrderConfirmation:
        """Submit the cart once; on success the cart is cleared.

        Any failure leaves the cart exactly as it was so the user can retry.
        """
        if self.submitting:
            logger.info("submit_blocked reason=in_progress")
            raise SubmissionInProgress()

        self.validate(customer, cart)
        payload = build_order_payload(customer, cart.lines())
        logger.info("submit_enter rows=%d items=%d", len(cart), cart.item_count)

        self.submitting = True
        try:
            data = await self._transport.submit_order(payload)
            confirmation = parse_confirmation(data)
        except SubmissionError as exc:
            logger.warning("submit_failed reason=%r", exc.reason)
            raise
        finally:
            self.submitting = False

        cart.clear()
        logger.info("submit_confirmed order_id=%s total=%s", confirmation.id, confirmation.total)
        return confirmation
