"""
Gemini HTTP Client

This module handles the two HTTP calls made to the Gemini generative-language
API: listing models and generating content. The API key is passed in at
construction and sent as the ``key`` query parameter.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .constants import (
    API_KEY_NOT_SET_MESSAGE,
    FETCH_MODELS_FAILED_MESSAGE,
    GEMINI_API_BASE_URL,
    GENERATE_TEXT_FAILED_MESSAGE,
)

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Base exception for relay errors."""
    pass


class ConfigurationError(RelayError):
    """Raised when a required setting (the API key) is missing."""
    pass


class UpstreamError(RelayError):
    """Raised when the Gemini API call fails or returns something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GeminiClient:
    """
    HTTP client for the Gemini REST API.

    Opens a fresh ``httpx.AsyncClient`` per call. There is no retry and no
    caching; every failure is reported as an ``UpstreamError``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = GEMINI_API_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: Gemini API key, may be empty (calls then fail fast)
            base_url: API base URL including the version segment
            timeout: Request timeout in seconds, None for no timeout
            transport: Optional httpx transport override
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(API_KEY_NOT_SET_MESSAGE)
        return self.api_key

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def _request_json(
        self,
        method: str,
        path: str,
        failure_message: str,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send an authenticated request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path below the base URL
            failure_message: Message for the UpstreamError raised on failure
            json_body: Optional JSON request body

        Returns:
            Decoded JSON body

        Raises:
            ConfigurationError: If the API key is not set
            UpstreamError: On transport errors, non-2xx status or invalid JSON
        """
        api_key = self._require_api_key()
        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json"} if json_body is not None else None

        async with self._http_client() as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    params={"key": api_key},
                    headers=headers,
                    json=json_body,
                )
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                logger.error(
                    "%s %s returned HTTP %d: %s",
                    method,
                    url,
                    e.response.status_code,
                    e.response.text,
                )
                raise UpstreamError(failure_message, e.response.status_code) from None
            except httpx.HTTPError as e:
                logger.error("%s %s failed: %r", method, url, e)
                raise UpstreamError(failure_message) from None
            except ValueError as e:
                logger.error("%s %s returned invalid JSON: %s", method, url, e)
                raise UpstreamError(failure_message) from None

    async def list_models(self) -> Dict[str, Any]:
        """
        Fetch the upstream model list.

        Returns:
            Raw response body (``{"models": [{"name": "models/..."}, ...]}``)
        """
        return await self._request_json("GET", "/models", FETCH_MODELS_FAILED_MESSAGE)

    async def generate_content(
        self,
        model: str,
        contents: List[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """
        Generate content with a Gemini model.

        Args:
            model: Model name without the ``models/`` prefix
            contents: Conversation contents in Gemini format

        Returns:
            Raw ``generateContent`` response body
        """
        return await self._request_json(
            "POST",
            f"/models/{model}:generateContent",
            GENERATE_TEXT_FAILED_MESSAGE,
            json_body={"contents": contents},
        )
