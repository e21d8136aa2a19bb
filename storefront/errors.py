"""Error types raised by the cart, pricing and ordering layers."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for recoverable storefront errors."""


class ValidationError(StorefrontError):
    """A precondition failed before any network interaction."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = list(fields or [])


class InvalidIndex(StorefrontError, LookupError):
    """A cart line was addressed by a key or position that does not exist."""


class SubmissionError(StorefrontError):
    """Order placement failed in transport or was rejected by the backend."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class SubmissionInProgress(SubmissionError):
    """Another order placement is still in flight for this session."""

    def __init__(self) -> None:
        super().__init__("Order submission already in progress")


class MenuLoadError(StorefrontError):
    """The menu could not be fetched or seeded."""
