"""Tests for order placement."""
from __future__ import annotations

import asyncio
import json
from decimal import Decimal

import httpx
import pytest

from storefront.errors import SubmissionError, SubmissionInProgress, ValidationError
from storefront.models import CustomerProfile, OrderConfirmation, Size
from storefront.orders import OrderSubmitter, build_order_payload, parse_confirmation

pytestmark = pytest.mark.anyio


def test_payload_shape(cart, customer, margherita, pepperoni):
    cart.add_item(margherita, Size.MEDIUM)
    cart.add_item(margherita, Size.MEDIUM)
    cart.add_item(pepperoni, Size.LARGE)

    payload = build_order_payload(customer, cart.lines())

    assert payload == {
        "customer_name": "Ada",
        "phone": "555-0100",
        "address": "1 Main St",
        "items": [
            {"pizza_id": "p1", "name": "Margherita", "size": "Medium", "quantity": 2, "unit_price": 10.99, "toppings": []},
            {"pizza_id": "p2", "name": "Pepperoni", "size": "Large", "quantity": 1, "unit_price": 12.49, "toppings": []},
        ],
    }
    # Must serialize as plain JSON.
    assert json.loads(json.dumps(payload)) == payload


@pytest.mark.parametrize(
    "data",
    [{}, {"id": "", "total": 1}, {"id": "A1"}, {"id": "A1", "total": "lots"}, {"id": "A1", "total": -1}],
)
def test_parse_confirmation_rejects_malformed_responses(data):
    with pytest.raises(SubmissionError):
        parse_confirmation(data)


def test_parse_confirmation_accepts_numeric_ids():
    assert parse_confirmation({"id": 42, "total": 11.87}) == OrderConfirmation(id=42, total=Decimal("11.87"))


async def test_successful_order_returns_confirmation_and_clears_cart(client, backend, cart, customer, margherita):
    cart.add_item(margherita, Size.MEDIUM)
    submitter = OrderSubmitter(client)

    confirmation = await submitter.place_order(customer, cart)

    assert confirmation == OrderConfirmation(id="A1", total=Decimal("11.87"))
    assert cart.is_empty
    assert not submitter.submitting
    assert customer.name == "Ada"

    [request] = backend.order_requests
    body = json.loads(request.content)
    assert body["customer_name"] == "Ada"
    assert body["items"][0]["pizza_id"] == "p1"
    assert "total" not in body


@pytest.mark.parametrize("missing", ["name", "phone", "address"])
async def test_missing_customer_field_fails_without_network(client, backend, cart, margherita, missing):
    cart.add_item(margherita, Size.MEDIUM)
    customer = CustomerProfile(name="Ada", phone="555-0100", address="1 Main St")
    setattr(customer, missing, "")

    with pytest.raises(ValidationError) as excinfo:
        await OrderSubmitter(client).place_order(customer, cart)

    assert str(excinfo.value) == "missing customer fields"
    assert excinfo.value.fields == [missing]
    assert backend.requests == []
    assert len(cart) == 1


async def test_whitespace_only_field_counts_as_missing(client, backend, cart, margherita):
    cart.add_item(margherita, Size.MEDIUM)
    customer = CustomerProfile(name="Ada", phone="   ", address="1 Main St")

    with pytest.raises(ValidationError):
        await OrderSubmitter(client).place_order(customer, cart)
    assert backend.requests == []


async def test_empty_cart_fails_without_network(client, backend, cart, customer):
    with pytest.raises(ValidationError, match="empty cart"):
        await OrderSubmitter(client).place_order(customer, cart)

    assert backend.requests == []


async def test_backend_error_preserves_cart(client, backend, cart, customer, margherita):
    backend.order_response = lambda request: httpx.Response(500, json={"detail": "kitchen on fire"})
    cart.add_item(margherita, Size.MEDIUM)
    cart.add_item(margherita, Size.MEDIUM)
    before = [(line.key, line.quantity) for line in cart]
    submitter = OrderSubmitter(client)

    with pytest.raises(SubmissionError) as excinfo:
        await submitter.place_order(customer, cart)

    assert "500" in excinfo.value.reason
    assert [(line.key, line.quantity) for line in cart] == before
    assert not submitter.submitting


async def test_transport_error_preserves_cart(client, backend, cart, customer, margherita):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    backend.order_response = refuse
    cart.add_item(margherita, Size.MEDIUM)

    with pytest.raises(SubmissionError, match="Failed to place order"):
        await OrderSubmitter(client).place_order(customer, cart)

    assert len(cart) == 1


async def test_malformed_success_response_preserves_cart(client, backend, cart, customer, margherita):
    backend.order_response = lambda request: httpx.Response(200, json={"status": "ok"})
    cart.add_item(margherita, Size.MEDIUM)

    with pytest.raises(SubmissionError):
        await OrderSubmitter(client).place_order(customer, cart)

    assert len(cart) == 1


async def test_retry_after_failure_succeeds(client, backend, cart, customer, margherita):
    responses = iter(
        [
            httpx.Response(503),
            httpx.Response(200, json={"id": "A2", "total": 11.87}),
        ]
    )
    backend.order_response = lambda request: next(responses)
    cart.add_item(margherita, Size.MEDIUM)
    submitter = OrderSubmitter(client)

    with pytest.raises(SubmissionError):
        await submitter.place_order(customer, cart)
    confirmation = await submitter.place_order(customer, cart)

    assert confirmation.id == "A2"
    assert cart.is_empty
    assert len(backend.order_requests) == 2


class _SlowTransport:
    def __init__(self) -> None:
        self.calls = 0
        self.release = asyncio.Event()

    async def submit_order(self, payload):
        self.calls += 1
        await self.release.wait()
        return {"id": "A1", "total": 11.87}


async def test_reentrant_submission_is_rejected(cart, customer, margherita):
    cart.add_item(margherita, Size.MEDIUM)
    transport = _SlowTransport()
    submitter = OrderSubmitter(transport)

    first = asyncio.create_task(submitter.place_order(customer, cart))
    await asyncio.sleep(0)
    assert submitter.submitting

    with pytest.raises(SubmissionInProgress):
        await submitter.place_order(customer, cart)
    assert len(cart) == 1

    transport.release.set()
    confirmation = await first

    assert confirmation.id == "A1"
    assert transport.calls == 1
    assert cart.is_empty
    assert not submitter.submitting
