"""Anthropic Messages API provider implementation."""

import logging
from typing import Any, Optional

from .base import ModelProvider
from .shared import ProviderResult, ProviderType

logger = logging.getLogger(__name__)


class AnthropicModelProvider(ModelProvider):
    """Adapter for ``POST /v1/messages``.

    Authentication uses the ``x-api-key`` header together with a pinned
    ``anthropic-version``. The system instruction travels in the top-level
    ``system`` field rather than as a message, and the answer is the text of
    the first content block.
    """

    PROVIDER_TYPE = ProviderType.ANTHROPIC
    FRIENDLY_NAME = "Anthropic"
    DEFAULT_MODEL = "claude-3-5-sonnet-latest"
    API_KEY_ENV = "ANTHROPIC_API_KEY"

    API_URL = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"
    MAX_TOKENS = 1024

    def _build_payload(self, prompt: str, system_prompt: Optional[str]) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            payload["system"] = system_prompt
        return payload

    @staticmethod
    def _extract_content(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        blocks = data.get("content")
        if not isinstance(blocks, list) or not blocks or not isinstance(blocks[0], dict):
            return ""
        text = blocks[0].get("text")
        return text if isinstance(text, str) else ""

    async def invoke(self, prompt: str, system_prompt: Optional[str] = None) -> ProviderResult:
        api_key = self._require_api_key()
        headers = {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self.API_VERSION,
        }

        logger.debug(f"Anthropic messages request to {self.model}")

        async with self._http_client() as client:
            response = await client.post(self.API_URL, headers=headers, json=self._build_payload(prompt, system_prompt))

        if not response.is_success:
            self._raise_for_status(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            data = None

        text = self._ensure_text(self._extract_content(data))
        return self._result(text)
