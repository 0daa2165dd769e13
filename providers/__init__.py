"""Provider adapters and the fallback dispatcher."""

from .anthropic import AnthropicModelProvider
from .base import ModelProvider
from .dispatcher import FallbackDispatcher
from .gemini import GeminiModelProvider
from .groq import GroqModelProvider
from .mistral import MistralModelProvider
from .openai import OpenAIModelProvider
from .openai_compatible import OpenAICompatibleProvider
from .shared import ProviderType

__all__ = [
    "AnthropicModelProvider",
    "FallbackDispatcher",
    "GeminiModelProvider",
    "GroqModelProvider",
    "MistralModelProvider",
    "ModelProvider",
    "OpenAICompatibleProvider",
    "OpenAIModelProvider",
    "ProviderType",
]
