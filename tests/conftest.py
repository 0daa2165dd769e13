"""
Pytest fixtures for the TramPLAR test-suite.

Provides fake adapters, dispatcher builders and an environment scrubbed of
real provider credentials so no test can reach a live vendor API.
"""

import asyncio
from typing import Optional

import pytest

from providers.base import ModelProvider
from providers.dispatcher import FallbackDispatcher
from providers.shared import ProviderResult, ProviderType

DEFAULT_ORDER = (
    ProviderType.OPENAI,
    ProviderType.ANTHROPIC,
    ProviderType.GEMINI,
    ProviderType.MISTRAL,
    ProviderType.GROQ,
)

_PROVIDER_ENV_KEYS = [
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GEMINI_API_KEY",
    "MISTRAL_API_KEY",
    "GROQ_API_KEY",
    "PROVIDER_ORDER",
    "PROVIDER_TIMEOUT_MS",
    "TRAMPLAR_FORCE_ENV_OVERRIDE",
]


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Strip provider credentials and chain overrides from the environment."""
    for key in _PROVIDER_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class FakeProvider(ModelProvider):
    """Scriptable adapter: answers ``text``, raises ``error`` or sleeps ``delay`` seconds first."""

    FRIENDLY_NAME = "Fake"
    DEFAULT_MODEL = "fake-model"

    def __init__(
        self,
        provider_type: ProviderType,
        text: Optional[str] = "answer",
        error: Optional[Exception] = None,
        delay: float = 0.0,
        model: Optional[str] = None,
    ):
        super().__init__(api_key="fake-key", model=model or f"{provider_type.value}-model")
        self.PROVIDER_TYPE = provider_type
        self.text = text
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, Optional[str]]] = []
        self.cancelled = False
        self.completed = False

    async def invoke(self, prompt: str, system_prompt: Optional[str] = None) -> ProviderResult:
        self.calls.append((prompt, system_prompt))
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        self.completed = True
        return ProviderResult(provider=self.PROVIDER_TYPE, model=self.model, text=self.text)


@pytest.fixture
def make_dispatcher():
    """Build a dispatcher over fake adapters keyed by provider type."""

    def _make(providers: dict, order=DEFAULT_ORDER, timeout_ms: int = 1000, fallback_message: str = "fallback"):
        registry = {}
        for provider_type in order:
            registry[provider_type] = providers.get(provider_type) or FakeProvider(
                provider_type, error=RuntimeError(f"{provider_type.value} unavailable")
            )
        return FallbackDispatcher(
            registry=registry,
            provider_order=order,
            timeout_ms=timeout_ms,
            fallback_message=fallback_message,
        )

    return _make
