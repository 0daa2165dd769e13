"""OpenAI model provider implementation.

Talks to the Chat Completions API (``/v1/chat/completions``) with a bearer
token.
"""

from .openai_compatible import OpenAICompatibleProvider
from .shared import ProviderType


class OpenAIModelProvider(OpenAICompatibleProvider):
    """First choice in the default chain.

    Uses ``gpt-4o-mini`` with a fixed sampling temperature of 0.7; the other
    chat-completions vendors keep their server-side default temperature.
    """

    PROVIDER_TYPE = ProviderType.OPENAI
    FRIENDLY_NAME = "OpenAI"
    DEFAULT_MODEL = "gpt-4o-mini"
    API_KEY_ENV = "OPENAI_API_KEY"
    BASE_URL = "https://api.openai.com/v1"
    DEFAULT_TEMPERATURE = 0.7
