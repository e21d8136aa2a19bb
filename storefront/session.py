"""Session-scoped state shared by the UI and the ordering layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from storefront.cart import CartStore
from storefront.client import BackendClient
from storefront.errors import MenuLoadError
from storefront.models import CustomerProfile, MenuItem, OrderConfirmation, Totals
from storefront.orders import OrderSubmitter
from storefront.pricing import compute_totals

logger = logging.getLogger(__name__)


@dataclass
class StorefrontSession:
    """One customer's cart, delivery details and backend handle."""

    client: BackendClient
    cart: CartStore = field(default_factory=CartStore)
    customer: CustomerProfile = field(default_factory=CustomerProfile)
    menu: list[MenuItem] = field(default_factory=list)
    last_confirmation: OrderConfirmation | None = None
    submitter: OrderSubmitter = field(init=False)

    def __post_init__(self) -> None:
        self.submitter = OrderSubmitter(self.client)

    @property
    def submitting(self) -> bool:
        return self.submitter.submitting

    def totals(self) -> Totals:
        return compute_totals(self.cart.lines())

    async def reload_menu(self) -> list[MenuItem]:
        try:
            self.menu = await self.client.fetch_menu()
        except MenuLoadError:
            self.menu = []
            raise
        return self.menu

    async def seed_menu(self) -> list[MenuItem]:
        self.menu = await self.client.seed_sample_menu()
        return self.menu

    async def place_order(self) -> OrderConfirmation:
        self.last_confirmation = None
        confirmation = await self.submitter.place_order(self.customer, self.cart)
        self.last_confirmation = confirmation
        return confirmation
