"""Tests for the Gemini generateContent adapter."""

import httpx
import pytest

from providers.gemini import GeminiModelProvider
from providers.shared import (
    ProviderAPIError,
    ProviderConfigurationError,
    ProviderEmptyResponseError,
    ProviderType,
)
from tests.transport_helpers import inject_transport


def _generate_payload(*texts):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text} for text in texts]}}]}


class TestGeminiProvider:
    """Test Gemini provider functionality."""

    def test_endpoint(self):
        provider = GeminiModelProvider(api_key="gemini-key")
        assert provider.endpoint == (
            "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"
        )

    @pytest.mark.asyncio
    async def test_successful_request(self, monkeypatch):
        provider = GeminiModelProvider(api_key="gemini-key")
        transport = inject_transport(monkeypatch, provider, lambda request: httpx.Response(200, json=_generate_payload("Hi")))

        result = await provider.invoke("Hello", "Be brief")

        assert result.provider == ProviderType.GEMINI
        assert result.model == "gemini-1.5-flash"
        assert result.text == "Hi"

        request = transport.last_request
        assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
        assert request.url.params["key"] == "gemini-key"
        assert "authorization" not in request.headers

        assert transport.last_json() == {
            "contents": [{"parts": [{"text": "System: Be brief"}, {"text": "Hello"}]}],
        }

    @pytest.mark.asyncio
    async def test_prompt_only_without_system_prompt(self, monkeypatch):
        provider = GeminiModelProvider(api_key="gemini-key")
        transport = inject_transport(monkeypatch, provider, lambda request: httpx.Response(200, json=_generate_payload("Hi")))

        await provider.invoke("Hello")

        assert transport.last_json() == {"contents": [{"parts": [{"text": "Hello"}]}]}

    @pytest.mark.asyncio
    async def test_parts_are_concatenated(self, monkeypatch):
        provider = GeminiModelProvider(api_key="gemini-key")
        inject_transport(monkeypatch, provider, lambda request: httpx.Response(200, json=_generate_payload("Hi ", "there")))

        result = await provider.invoke("Hello")

        assert result.text == "Hi there"

    @pytest.mark.asyncio
    async def test_non_text_parts_are_skipped(self, monkeypatch):
        payload = {"candidates": [{"content": {"parts": [{"text": 7}, {"inlineData": {}}, {"text": "Hi there"}]}}]}
        provider = GeminiModelProvider(api_key="gemini-key")
        inject_transport(monkeypatch, provider, lambda request: httpx.Response(200, json=payload))

        result = await provider.invoke("Hello")

        assert result.text == "Hi there"

    @pytest.mark.asyncio
    async def test_missing_key(self):
        with pytest.raises(ProviderConfigurationError, match="GEMINI_API_KEY missing"):
            await GeminiModelProvider().invoke("Hello")

    @pytest.mark.asyncio
    async def test_http_error(self, monkeypatch):
        provider = GeminiModelProvider(api_key="gemini-key")
        inject_transport(monkeypatch, provider, lambda request: httpx.Response(400, text="API key not valid"))

        with pytest.raises(ProviderAPIError, match="Gemini error 400: API key not valid"):
            await provider.invoke("Hello")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"candidates": []},
            {"candidates": [{"finishReason": "SAFETY"}]},
            {"candidates": [{"content": {"parts": [{"text": " "}]}}]},
            {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
            {"candidates": [{"content": {"parts": [{"text": ["nested"]}, "loose"]}}]},
            {"promptFeedback": {"blockReason": "SAFETY"}},
        ],
    )
    async def test_unusable_answer_is_empty_error(self, monkeypatch, payload):
        provider = GeminiModelProvider(api_key="gemini-key")
        inject_transport(monkeypatch, provider, lambda request: httpx.Response(200, json=payload))

        with pytest.raises(ProviderEmptyResponseError, match="Gemini returned empty"):
            await provider.invoke("Hello")
