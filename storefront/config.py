"""Runtime configuration defaults for the backend client and logging."""

from __future__ import annotations

import os


def env_float(name: str, default: float) -> float:
    """Read a float override from the environment, ignoring malformed values."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


BACKEND_URL = os.environ.get("STOREFRONT_BACKEND_URL", "").strip() or "http://localhost:8000"
REQUEST_TIMEOUT_SECONDS = env_float("STOREFRONT_REQUEST_TIMEOUT", 10.0)

DEBUG_LOG_PATH = os.environ.get("STOREFRONT_DEBUG_LOG", "").strip() or "/tmp/storefront-debug.log"

MENU_PATH = "/api/menu"
ORDER_PATH = "/api/order"

DEFAULT_SIZE = "Medium"
