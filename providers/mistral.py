"""Mistral AI model provider implementation."""

from .openai_compatible import OpenAICompatibleProvider
from .shared import ProviderType


class MistralModelProvider(OpenAICompatibleProvider):
    """Mistral's OpenAI-compatible chat completions endpoint."""

    PROVIDER_TYPE = ProviderType.MISTRAL
    FRIENDLY_NAME = "Mistral"
    DEFAULT_MODEL = "mistral-large-latest"
    API_KEY_ENV = "MISTRAL_API_KEY"
    BASE_URL = "https://api.mistral.ai/v1"
