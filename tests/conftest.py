"""Shared fixtures: a Gemini client whose transport records every request."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from gemini_relay import GeminiClient, RelayService

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://gemini.test/v1beta"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps the requests it has served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


def json_responder(body: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)
    return handler


def gemini_response(
    candidates: Optional[List[Dict[str, Any]]] = None,
    usage: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    if candidates is None:
        candidates = [
            {
                "content": {"role": "model", "parts": [{"text": "Hi there"}]},
                "finishReason": "STOP",
            }
        ]
    return {
        "candidates": candidates,
        "usageMetadata": usage or {
            "promptTokenCount": 3,
            "candidatesTokenCount": 2,
            "totalTokenCount": 5,
        },
    }


MODEL_LIST = {
    "models": [
        {"name": "models/gemini-1.5-flash", "displayName": "Gemini 1.5 Flash"},
        {"name": "models/gemini-1.5-pro"},
        {"name": "models/text-embedding-004"},
    ]
}


@pytest.fixture
def make_service():
    """Build a RelayService around a recording transport."""

    def factory(handler, api_key: str = TEST_API_KEY):
        transport = RecordingTransport(handler)
        client = GeminiClient(api_key=api_key, base_url=TEST_BASE_URL, transport=transport)
        service = RelayService(
            client,
            id_factory=lambda: "chatcmpl-test00001",
            clock=lambda: 1700000000.75,
        )
        return service, transport

    return factory
