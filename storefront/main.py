"""Entry point for the storefront Textual app."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from storefront.client import BackendClient
from storefront.config import BACKEND_URL, DEBUG_LOG_PATH
from storefront.session import StorefrontSession
from storefront.storefront_app import StorefrontApp

logger = logging.getLogger(__name__)


def configure_logging(path: str = DEBUG_LOG_PATH, level: int = logging.INFO) -> None:
    """Send log records to a file so they never draw over the terminal UI."""
    log_file = Path(path)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root = logging.getLogger("storefront")
    root.setLevel(level)
    root.addHandler(handler)


async def run_app() -> None:
    async with BackendClient(BACKEND_URL) as client:
        app = StorefrontApp(StorefrontSession(client=client))
        logger.info("app_start backend=%s", client.base_url)
        await app.run_async()


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    asyncio.run(run_app())


if __name__ == "__main__":
    main()
