"""
Test Gemini Client

URL construction and error mapping of the raw HTTP client.
"""

import httpx
import pytest

from conftest import RecordingTransport, json_responder
from gemini_relay import ConfigurationError, GeminiClient, UpstreamError


class TestGeminiClient:

    def test_base_url_trailing_slash_is_dropped(self):
        client = GeminiClient(api_key="k", base_url="https://example.test/v1beta/")
        assert client.base_url == "https://example.test/v1beta"

    @pytest.mark.asyncio
    async def test_generate_content_posts_contents(self):
        transport = RecordingTransport(json_responder({"candidates": []}))
        client = GeminiClient(api_key="abc", base_url="https://example.test/v1", transport=transport)
        contents = [{"parts": [{"text": "Hi"}]}]

        body = await client.generate_content("gemini-1.5-pro", contents)

        assert body == {"candidates": []}
        request = transport.requests[0]
        assert str(request.url) == (
            "https://example.test/v1/models/gemini-1.5-pro:generateContent?key=abc"
        )
        assert transport.last_json() == {"contents": contents}

    @pytest.mark.asyncio
    async def test_list_models_url(self):
        transport = RecordingTransport(json_responder({"models": []}))
        client = GeminiClient(api_key="abc", base_url="https://example.test/v1", transport=transport)

        await client.list_models()

        assert str(transport.requests[0].url) == "https://example.test/v1/models?key=abc"

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        transport = RecordingTransport(json_responder({}))
        client = GeminiClient(api_key="", transport=transport)

        with pytest.raises(ConfigurationError, match="API key not set"):
            await client.list_models()

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_invalid_json_is_upstream_error(self):
        def handler(request):
            return httpx.Response(200, text="<html>not json</html>")

        client = GeminiClient(api_key="abc", transport=RecordingTransport(handler))

        with pytest.raises(UpstreamError, match="failed to fetch models"):
            await client.list_models()

    @pytest.mark.asyncio
    async def test_server_error_keeps_status_code(self):
        client = GeminiClient(
            api_key="abc",
            transport=RecordingTransport(json_responder({"error": {}}, status_code=503)),
        )

        with pytest.raises(UpstreamError) as exc_info:
            await client.generate_content("gemini-1.5-flash", [])

        assert exc_info.value.status_code == 503
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__
