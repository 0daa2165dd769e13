"""Fallback chain across the configured providers.

The dispatcher walks the provider order one adapter at a time, bounding each
attempt with a deadline, and returns the first non-blank answer. Every
failure along the way is turned into an :class:`AttemptError` so callers
always receive a :class:`DispatchOutcome`, never an adapter exception.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Optional

from .base import ModelProvider
from .shared import AttemptError, DispatchOutcome, ProviderType
from .timeouts import with_timeout

logger = logging.getLogger(__name__)


def _describe_error(exc: BaseException) -> str:
    message = str(exc)
    return message if message else exc.__class__.__name__


class FallbackDispatcher:
    """Ask providers in priority order until one answers."""

    def __init__(
        self,
        registry: Mapping[ProviderType, ModelProvider],
        provider_order: Sequence[ProviderType],
        timeout_ms: int,
        fallback_message: str,
    ):
        missing = [provider.value for provider in provider_order if provider not in registry]
        if missing:
            raise ValueError(f"No adapter registered for provider(s): {', '.join(missing)}")
        if timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {timeout_ms}")

        self._registry = dict(registry)
        self.provider_order: tuple[ProviderType, ...] = tuple(provider_order)
        self.timeout_ms = timeout_ms
        self.fallback_message = fallback_message

    async def dispatch(self, prompt: str, system_prompt: Optional[str] = None) -> DispatchOutcome:
        errors: list[AttemptError] = []

        for provider_type in self.provider_order:
            name = provider_type.value
            adapter = self._registry[provider_type]
            logger.debug(f"Trying provider {name}")

            try:
                result = await with_timeout(adapter.invoke(prompt, system_prompt), self.timeout_ms, name)
            except Exception as exc:
                message = _describe_error(exc)
                logger.warning(f"Provider {name} failed: {message}")
                errors.append(AttemptError(provider=provider_type, error=message))
                continue

            if result is None or not isinstance(result.text, str) or not result.text.strip():
                message = f"{name} returned empty"
                logger.warning(f"Provider {name} failed: {message}")
                errors.append(AttemptError(provider=provider_type, error=message))
                continue

            logger.info(f"Answered by {name} ({result.model}) after {len(errors)} failed attempt(s)")
            return DispatchOutcome(
                provider=provider_type,
                model=result.model,
                text=result.text,
                tried=list(self.provider_order),
                errors=errors,
            )

        logger.error(f"All {len(self.provider_order)} providers failed")
        return DispatchOutcome(
            provider=None,
            model=None,
            text=self.fallback_message,
            tried=list(self.provider_order),
            errors=errors,
        )
