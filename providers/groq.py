"""Groq model provider implementation."""

from .openai_compatible import OpenAICompatibleProvider
from .shared import ProviderType


class GroqModelProvider(OpenAICompatibleProvider):
    """Groq serves open-weight models behind an OpenAI-compatible API under ``/openai/v1``."""

    PROVIDER_TYPE = ProviderType.GROQ
    FRIENDLY_NAME = "Groq"
    DEFAULT_MODEL = "llama-3.1-70b-versatile"
    API_KEY_ENV = "GROQ_API_KEY"
    BASE_URL = "https://api.groq.com/openai/v1"
