"""Storefront client error kinds."""

from typing import Optional


class StorefrontError(Exception):
    """Base class for storefront client errors."""


class FetchFailure(StorefrontError):
    """
    Reading the catalog or order store failed (network, HTTP status or
    payload parse error). Callers recover locally with fallback data.
    """

    def __init__(self, store: str, reason: str):
        super().__init__(f"{store} fetch failed: {reason}")
        self.store = store
        self.reason = reason


class SubmitFailure(StorefrontError):
    """Posting a checkout to the order store failed."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(f"Order submission failed: {reason}")
        self.reason = reason
        self.status_code = status_code


class EmptyCartError(StorefrontError):
    """Checkout was attempted with no cart lines."""


class LookupMiss(KeyError):
    """An add-to-cart referenced a restaurant or menu item not in the catalog."""
