"""Base class shared by every provider adapter."""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, NoReturn, Optional

import httpx

from .shared import (
    ProviderAPIError,
    ProviderConfigurationError,
    ProviderEmptyResponseError,
    ProviderResult,
    ProviderType,
)

logger = logging.getLogger(__name__)

# Transport-level ceiling; the dispatcher enforces the per-attempt deadline
DEFAULT_HTTP_TIMEOUT = 60.0


class ModelProvider(ABC):
    """Translate the generic ``(prompt, system_prompt)`` pair into one vendor call.

    Subclasses declare their vendor identity through class attributes and
    implement :meth:`invoke`. Every invocation is a single stateless
    request/response exchange: no retries, no streaming and no conversation
    history. Failures are raised, never returned.
    """

    PROVIDER_TYPE: ClassVar[ProviderType]
    FRIENDLY_NAME: ClassVar[str] = "Provider"
    DEFAULT_MODEL: ClassVar[str] = ""
    API_KEY_ENV: ClassVar[str] = ""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key or None
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or DEFAULT_HTTP_TIMEOUT

    def get_provider_type(self) -> ProviderType:
        return self.PROVIDER_TYPE

    @abstractmethod
    async def invoke(self, prompt: str, system_prompt: Optional[str] = None) -> ProviderResult:
        """Ask the vendor for an answer to ``prompt``."""

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ProviderConfigurationError(f"{self.API_KEY_ENV} missing")
        return self.api_key

    def _raise_for_status(self, status_code: int, body: str) -> NoReturn:
        raise ProviderAPIError(f"{self.FRIENDLY_NAME} error {status_code}: {body}", status_code=status_code, body=body)

    def _ensure_text(self, text: object) -> str:
        if not isinstance(text, str) or not text.strip():
            raise ProviderEmptyResponseError(f"{self.FRIENDLY_NAME} returned empty")
        return text

    def _result(self, text: str) -> ProviderResult:
        return ProviderResult(provider=self.PROVIDER_TYPE, model=self.model, text=text)

    def _http_client(self) -> httpx.AsyncClient:
        """Build a fresh async HTTP client, honouring an injected test transport."""
        if hasattr(self, "_test_transport"):
            return httpx.AsyncClient(
                transport=self._test_transport,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), follow_redirects=True)

    def __repr__(self) -> str:
        configured = "configured" if self.api_key else "missing key"
        return f"<{self.__class__.__name__} model={self.model} ({configured})>"
