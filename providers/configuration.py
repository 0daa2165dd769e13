"""
Shared provider configuration logic.

This module turns environment variables into an immutable
``DispatcherConfig`` and wires up the adapter registry and the fallback
dispatcher. Both the HTTP server and the command-line runner go through
``build_dispatcher()`` so they behave identically.

IMPORTANT: When adding a new provider, implement ``ModelProvider``, add a
``ProviderType`` member and append an entry to PROVIDER_CONFIGS below. The
dispatcher itself needs no changes.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import import_module
from types import MappingProxyType
from typing import Callable, Optional

import config

from .base import ModelProvider
from .dispatcher import FallbackDispatcher
from .shared import ProviderType

logger = logging.getLogger(__name__)

# =============================================================================
# Provider Configuration Registry
# =============================================================================

# Format: (ProviderType, env_key, placeholder_value, provider_import_path)
PROVIDER_CONFIGS = [
    (ProviderType.OPENAI, "OPENAI_API_KEY", "your_openai_api_key_here", "providers.openai:OpenAIModelProvider"),
    (
        ProviderType.ANTHROPIC,
        "ANTHROPIC_API_KEY",
        "your_anthropic_api_key_here",
        "providers.anthropic:AnthropicModelProvider",
    ),
    (ProviderType.GEMINI, "GEMINI_API_KEY", "your_gemini_api_key_here", "providers.gemini:GeminiModelProvider"),
    (ProviderType.MISTRAL, "MISTRAL_API_KEY", "your_mistral_api_key_here", "providers.mistral:MistralModelProvider"),
    (ProviderType.GROQ, "GROQ_API_KEY", "your_groq_api_key_here", "providers.groq:GroqModelProvider"),
]


@dataclass(frozen=True)
class DispatcherConfig:
    """Process-wide settings, fixed at startup and read-only afterwards."""

    provider_order: tuple[ProviderType, ...] = tuple(ProviderType(name) for name in config.DEFAULT_PROVIDER_ORDER)
    timeout_ms: int = config.DEFAULT_TIMEOUT_MS
    credentials: Mapping[ProviderType, Optional[str]] = field(default_factory=lambda: MappingProxyType({}))
    fallback_message: str = config.FALLBACK_MESSAGE

    def has_credential(self, provider_type: ProviderType) -> bool:
        return bool(self.credentials.get(provider_type))


def _import_provider_class(import_path: str):
    """Dynamically import a provider class from import path like 'providers.gemini:GeminiModelProvider'."""
    module_path, class_name = import_path.split(":")
    module = import_module(module_path)
    return getattr(module, class_name)


def parse_provider_order(raw: str) -> tuple[ProviderType, ...]:
    """Parse a comma separated list such as ``"groq,openai"``."""
    names = [name.strip().lower() for name in raw.split(",") if name.strip()]
    if not names:
        raise ValueError("PROVIDER_ORDER must name at least one provider")

    order = []
    for name in names:
        try:
            provider_type = ProviderType(name)
        except ValueError:
            valid = ", ".join(p.value for p in ProviderType)
            raise ValueError(f"Unknown provider '{name}' in PROVIDER_ORDER. Valid providers: {valid}") from None
        if provider_type in order:
            raise ValueError(f"Provider '{name}' listed more than once in PROVIDER_ORDER")
        order.append(provider_type)
    return tuple(order)


def load_dispatcher_config(get_env: Callable[[str, Optional[str]], Optional[str]]) -> DispatcherConfig:
    """
    Build the immutable dispatcher configuration from environment variables.

    Args:
        get_env: Function to get environment variables (e.g., os.getenv or utils.env.get_env)

    Returns:
        DispatcherConfig with credentials for every known provider (``None`` when unset)

    Raises:
        ValueError: If PROVIDER_ORDER or PROVIDER_TIMEOUT_MS is invalid
    """
    credentials: dict[ProviderType, Optional[str]] = {}
    for provider_type, env_key, placeholder, _ in PROVIDER_CONFIGS:
        api_key = (get_env(env_key, None) or "").strip()
        if api_key and api_key != placeholder:
            credentials[provider_type] = api_key
        else:
            credentials[provider_type] = None

    raw_order = get_env("PROVIDER_ORDER", None)
    if raw_order and raw_order.strip():
        provider_order = parse_provider_order(raw_order)
    else:
        provider_order = tuple(ProviderType(name) for name in config.DEFAULT_PROVIDER_ORDER)

    raw_timeout = get_env("PROVIDER_TIMEOUT_MS", None)
    timeout_ms = config.DEFAULT_TIMEOUT_MS
    if raw_timeout and raw_timeout.strip():
        try:
            timeout_ms = int(raw_timeout.strip())
        except ValueError as exc:
            raise ValueError(f"PROVIDER_TIMEOUT_MS must be an integer, got {raw_timeout!r}") from exc
    if timeout_ms <= 0:
        raise ValueError(f"PROVIDER_TIMEOUT_MS must be positive, got {timeout_ms}")

    return DispatcherConfig(
        provider_order=provider_order,
        timeout_ms=timeout_ms,
        credentials=MappingProxyType(credentials),
        fallback_message=config.FALLBACK_MESSAGE,
    )


def build_provider_registry(dispatcher_config: DispatcherConfig) -> dict[ProviderType, ModelProvider]:
    """
    Instantiate one adapter per configured provider.

    Providers without a credential are still registered: they fail fast when
    invoked, so they keep their place in the ``tried`` list and produce an
    attempt error instead of silently disappearing.
    """
    registry: dict[ProviderType, ModelProvider] = {}
    for provider_type, env_key, _, import_path in PROVIDER_CONFIGS:
        if provider_type not in dispatcher_config.provider_order:
            continue
        provider_class = _import_provider_class(import_path)
        api_key = dispatcher_config.credentials.get(provider_type)
        registry[provider_type] = provider_class(api_key=api_key)
        if api_key:
            logger.info(f"{provider_type.value} provider registered")
        else:
            logger.warning(f"{provider_type.value} provider registered without {env_key}; it will fail fast")
    return registry


def build_dispatcher(
    dispatcher_config: DispatcherConfig,
    registry: Optional[Mapping[ProviderType, ModelProvider]] = None,
) -> FallbackDispatcher:
    """Wire the registry into a ready-to-use :class:`FallbackDispatcher`."""
    if registry is None:
        registry = build_provider_registry(dispatcher_config)

    dispatcher = FallbackDispatcher(
        registry=registry,
        provider_order=dispatcher_config.provider_order,
        timeout_ms=dispatcher_config.timeout_ms,
        fallback_message=dispatcher_config.fallback_message,
    )

    configured = [p.value for p in dispatcher_config.provider_order if dispatcher_config.has_credential(p)]
    logger.info(
        f"Provider order: {' -> '.join(p.value for p in dispatcher_config.provider_order)} "
        f"(timeout {dispatcher_config.timeout_ms}ms, credentials for: {', '.join(configured) or 'none'})"
    )
    return dispatcher
