"""HTTP client for the pizzeria backend (menu and order endpoints)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from storefront.config import BACKEND_URL, MENU_PATH, ORDER_PATH, REQUEST_TIMEOUT_SECONDS
from storefront.data import SAMPLE_PIZZAS
from storefront.errors import MenuLoadError, SubmissionError
from storefront.models import MenuItem

logger = logging.getLogger(__name__)


class BackendClient:
    """Thin async wrapper around the backend REST API.

    No retries happen here; every failure is surfaced to the caller as a
    storefront error. ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch_menu(self) -> list[MenuItem]:
        """Fetch the current menu."""
        try:
            resp = await self._http.get(MENU_PATH)
        except httpx.RequestError as exc:
            logger.warning("menu_load_failed error=%r", exc)
            raise MenuLoadError(f"Failed to load menu ({exc.__class__.__name__})") from exc

        if not resp.is_success:
            logger.warning("menu_load_failed status=%d", resp.status_code)
            raise MenuLoadError(f"Failed to load menu ({resp.status_code})")

        try:
            data = resp.json()
            if not isinstance(data, list):
                raise ValueError("menu response is not a list")
            menu = [MenuItem.from_dict(record) for record in data]
        except ValueError as exc:
            logger.warning("menu_load_failed malformed=%r", exc)
            raise MenuLoadError(f"Failed to load menu (malformed response: {exc})") from exc

        logger.info("menu_loaded items=%d", len(menu))
        return menu

    async def add_menu_item(self, item: dict[str, Any]) -> None:
        resp = await self._http.post(MENU_PATH, json=item)
        resp.raise_for_status()

    async def seed_sample_menu(self) -> list[MenuItem]:
        """Publish the sample pizzas and return the refreshed menu."""
        # The first failed post cancels the ones still in flight.
        try:
            async with asyncio.TaskGroup() as tg:
                for pizza in SAMPLE_PIZZAS:
                    tg.create_task(self.add_menu_item(pizza))
        except ExceptionGroup as group:
            if group.subgroup(httpx.HTTPError) is None:
                raise
            logger.warning("menu_seed_failed errors=%r", group.exceptions)
            raise MenuLoadError("Failed to add sample pizzas") from group
        logger.info("menu_seeded items=%d", len(SAMPLE_PIZZAS))
        return await self.fetch_menu()

    async def submit_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one order placement request and return the decoded body."""
        try:
            resp = await self._http.post(ORDER_PATH, json=payload)
        except httpx.RequestError as exc:
            raise SubmissionError(f"Failed to place order: {exc}") from exc

        if not resp.is_success:
            raise SubmissionError(f"Failed to place order ({resp.status_code})")

        try:
            data = resp.json()
        except ValueError as exc:
            raise SubmissionError("Failed to place order (invalid response body)") from exc
        if not isinstance(data, dict):
            raise SubmissionError("Failed to place order (invalid response body)")
        return data
