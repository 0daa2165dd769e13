"""Gemini model provider implementation."""

import logging
from typing import Any, Optional

from .base import ModelProvider
from .shared import ProviderResult, ProviderType

logger = logging.getLogger(__name__)


class GeminiModelProvider(ModelProvider):
    """Adapter for the Generative Language ``generateContent`` REST endpoint.

    The API key is passed as the ``key`` query parameter. Gemini has no
    separate system slot in this request shape, so the system instruction is
    sent as a leading ``System: ...`` text part. The answer is the
    concatenation of every text part of the first candidate.
    """

    PROVIDER_TYPE = ProviderType.GEMINI
    FRIENDLY_NAME = "Gemini"
    DEFAULT_MODEL = "gemini-1.5-flash"
    API_KEY_ENV = "GEMINI_API_KEY"

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs):
        super().__init__(api_key, **kwargs)
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def _build_payload(self, prompt: str, system_prompt: Optional[str]) -> dict[str, Any]:
        parts = []
        if system_prompt:
            parts.append({"text": f"System: {system_prompt}"})
        parts.append({"text": prompt})
        return {"contents": [{"parts": parts}]}

    @staticmethod
    def _extract_content(data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        if not isinstance(content, dict):
            return ""
        parts = content.get("parts")
        if not isinstance(parts, list):
            return ""
        return "".join(
            part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
        )

    async def invoke(self, prompt: str, system_prompt: Optional[str] = None) -> ProviderResult:
        api_key = self._require_api_key()

        logger.debug(f"Gemini generateContent request to {self.model}")

        async with self._http_client() as client:
            response = await client.post(
                self.endpoint,
                params={"key": api_key},
                headers={"Content-Type": "application/json"},
                json=self._build_payload(prompt, system_prompt),
            )

        if not response.is_success:
            self._raise_for_status(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            data = None

        text = self._ensure_text(self._extract_content(data))
        return self._result(text)
