"""Value objects exchanged between adapters, the dispatcher and callers."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .provider_type import ProviderType

__all__ = ["ProviderResult", "AttemptError", "DispatchOutcome"]


@dataclass(frozen=True)
class ProviderResult:
    """Answer produced by a single successful adapter invocation."""

    provider: ProviderType
    model: str
    text: str


@dataclass(frozen=True)
class AttemptError:
    """One failed attempt, recorded in the order providers were tried."""

    provider: ProviderType
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"provider": self.provider.value, "error": self.error}


@dataclass
class DispatchOutcome:
    """Terminal value returned for every dispatched prompt.

    ``provider`` and ``model`` are ``None`` when every provider in the chain
    failed; ``text`` then carries the configured fallback message.
    """

    provider: Optional[ProviderType]
    model: Optional[str]
    text: str
    tried: list[ProviderType] = field(default_factory=list)
    errors: list[AttemptError] = field(default_factory=list)

    @property
    def answered(self) -> bool:
        return self.provider is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape returned by ``POST /api/chat``."""
        return {
            "provider": self.provider.value if self.provider else None,
            "model": self.model,
            "text": self.text,
            "tried": [provider.value for provider in self.tried],
            "errors": [error.to_dict() for error in self.errors],
        }
