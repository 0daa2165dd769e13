"""Exception hierarchy raised by provider adapters."""

from typing import Optional

__all__ = [
    "ProviderError",
    "ProviderConfigurationError",
    "ProviderTimeoutError",
    "ProviderAPIError",
    "ProviderEmptyResponseError",
]


class ProviderError(RuntimeError):
    """Base class for every failure surfaced by an adapter."""


class ProviderConfigurationError(ProviderError):
    """Raised when an adapter's credential is not configured."""


class ProviderTimeoutError(ProviderError):
    """Raised when an attempt exceeds its deadline."""


class ProviderAPIError(ProviderError):
    """Raised when a vendor answers with a non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ProviderEmptyResponseError(ProviderError):
    """Raised when a vendor answers successfully but without usable text."""
