"""Shared data types and enums for provider adapters."""

from .errors import (
    ProviderAPIError,
    ProviderConfigurationError,
    ProviderEmptyResponseError,
    ProviderError,
    ProviderTimeoutError,
)
from .provider_result import AttemptError, DispatchOutcome, ProviderResult
from .provider_type import ProviderType

__all__ = [
    "AttemptError",
    "DispatchOutcome",
    "ProviderAPIError",
    "ProviderConfigurationError",
    "ProviderEmptyResponseError",
    "ProviderError",
    "ProviderResult",
    "ProviderTimeoutError",
    "ProviderType",
]
