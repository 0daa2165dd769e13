"""Base class for vendors exposing an OpenAI-compatible chat completions API."""

import logging
from typing import ClassVar, Optional

from openai import APIResponseValidationError, APIStatusError, AsyncOpenAI

from .base import ModelProvider
from .shared import ProviderResult

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(ModelProvider):
    """Adapter for any ``/chat/completions`` endpoint speaking the OpenAI dialect.

    Requests go through the official ``openai`` SDK pointed at ``BASE_URL``
    with SDK-level retries disabled. The system instruction, when present,
    is sent as a leading ``system`` role message, and the answer is read from
    ``choices[0].message.content``.
    """

    BASE_URL: ClassVar[str] = ""
    DEFAULT_TEMPERATURE: ClassVar[Optional[float]] = None

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs):
        super().__init__(api_key, **kwargs)
        self.base_url = base_url or self.BASE_URL

    def _client(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.base_url,
            max_retries=0,
            timeout=self.timeout,
            http_client=self._http_client(),
        )

    def _build_messages(self, prompt: str, system_prompt: Optional[str]) -> list[dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _build_request(self, prompt: str, system_prompt: Optional[str]) -> dict:
        request_params = {
            "model": self.model,
            "messages": self._build_messages(prompt, system_prompt),
        }
        if self.DEFAULT_TEMPERATURE is not None:
            request_params["temperature"] = self.DEFAULT_TEMPERATURE
        return request_params

    @staticmethod
    def _extract_content(response) -> str:
        """Return ``choices[0].message.content`` or an empty string."""
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        return content if isinstance(content, str) else ""

    async def invoke(self, prompt: str, system_prompt: Optional[str] = None) -> ProviderResult:
        api_key = self._require_api_key()
        request_params = self._build_request(prompt, system_prompt)

        logger.debug(f"{self.FRIENDLY_NAME} chat completion request to {self.model}")

        async with self._client(api_key) as client:
            try:
                response = await client.chat.completions.create(**request_params)
            except APIStatusError as exc:
                self._raise_for_status(exc.status_code, exc.response.text)
            except (APIResponseValidationError, ValueError):
                self._ensure_text("")

        text = self._ensure_text(self._extract_content(response))
        return self._result(text)
