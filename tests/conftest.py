"""Shared fixtures: menu items, carts and a mock backend."""
from __future__ import annotations

import asyncio
import json
from decimal import Decimal
from typing import Callable

import httpx
import pytest

from storefront.cart import CartStore
from storefront.client import BackendClient
from storefront.models import CustomerProfile, MenuItem

MENU_JSON = [
    {
        "id": "p1",
        "name": "Margherita",
        "description": "Tomato, mozzarella, fresh basil",
        "price": 10.99,
        "vegetarian": True,
        "spicy": False,
        "image_url": None,
    },
    {
        "id": "p2",
        "name": "Pepperoni",
        "description": "Pepperoni, mozzarella, tomato sauce",
        "price": 12.49,
        "vegetarian": False,
        "spicy": False,
    },
    {
        "id": "p3",
        "name": "Diavola",
        "description": "Spicy salami, chili, tomato, mozzarella",
        "price": 13.99,
        "vegetarian": False,
        "spicy": True,
    },
]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def margherita() -> MenuItem:
    return MenuItem(id="p1", name="Margherita", price=Decimal("10.99"), vegetarian=True)


@pytest.fixture
def pepperoni() -> MenuItem:
    return MenuItem(id="p2", name="Pepperoni", price=Decimal("12.49"))


@pytest.fixture
def cart() -> CartStore:
    return CartStore()


@pytest.fixture
def customer() -> CustomerProfile:
    return CustomerProfile(name="Ada", phone="555-0100", address="1 Main St")


class FakeBackend:
    """Records requests and answers them like the pizzeria API."""

    def __init__(self) -> None:
        self.menu: list[dict] = list(MENU_JSON)
        self.requests: list[httpx.Request] = []
        self.order_response: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"id": "A1", "total": 11.87}
        )
        self.menu_status = 200
        self.menu_gate: asyncio.Event | None = None

    @property
    def order_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST" and r.url.path == "/api/order"]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/menu" and request.method == "GET":
            if self.menu_gate is not None:
                await self.menu_gate.wait()
            if self.menu_status != 200:
                return httpx.Response(self.menu_status, json={"detail": "boom"})
            return httpx.Response(200, json=self.menu)
        if request.url.path == "/api/menu" and request.method == "POST":
            record = json.loads(request.content)
            record["id"] = f"s{len(self.menu) + 1}"
            self.menu.append(record)
            return httpx.Response(201, json=record)
        if request.url.path == "/api/order" and request.method == "POST":
            return self.order_response(request)
        return httpx.Response(404)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def client(backend: FakeBackend, anyio_backend):
    async with BackendClient("http://backend.test", transport=httpx.MockTransport(backend.handler)) as client:
        yield client
