"""
Gemini Relay Service

Translates between the OpenAI-style completion shape served by the relay and
the Gemini ``generateContent`` shape. Also lists upstream models with their
namespace prefix removed.
"""

import base64
import logging
import random
import string
import time
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from .api_server.schemas import (
    ChatCompletionChoice,
    ChatMessage,
    CompletionRequest,
    CompletionResponse,
    CompletionUsage,
    GeminiCandidate,
    GeminiGenerateContentResponse,
    GeminiModelList,
)
from .client import GeminiClient, UpstreamError
from .config import Settings
from .constants import (
    COMPLETION_ID_LENGTH,
    COMPLETION_ID_PREFIX,
    FETCH_MODELS_FAILED_MESSAGE,
    GENERATE_TEXT_FAILED_MESSAGE,
    MODEL_NAMESPACE_SEPARATOR,
    SYSTEM_FINGERPRINT,
)

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_completion_id() -> str:
    """
    Generate a completion ID such as ``chatcmpl-k3j9x0a2q``.

    Not cryptographically secure and not checked for collisions.
    """
    suffix = "".join(random.choices(_ID_ALPHABET, k=COMPLETION_ID_LENGTH))
    return f"{COMPLETION_ID_PREFIX}{suffix}"


def strip_model_namespace(name: str) -> str:
    """
    Remove the leading namespace segment from a model identifier.

    Args:
        name: Upstream model name, e.g. ``models/gemini-1.5-flash``

    Returns:
        Name without the namespace, e.g. ``gemini-1.5-flash``
    """
    _, separator, rest = name.partition(MODEL_NAMESPACE_SEPARATOR)
    return rest if separator else name


def build_contents(request: CompletionRequest) -> List[Dict[str, Any]]:
    """
    Build the Gemini ``contents`` array for a completion request.

    A single content block always carries the prompt as its first part. When
    inline data is present it is appended as a second, base64-encoded part.

    Args:
        request: Completion request with defaults already applied

    Returns:
        Contents in Gemini format
    """
    parts: List[Dict[str, Any]] = [{"text": request.prompt}]

    payload = request.inline_bytes()
    if payload is not None:
        parts.append({
            "inline_data": {
                "mime_type": request.mime_type,
                "data": base64.b64encode(payload).decode("ascii"),
            }
        })

    return [{"parts": parts}]


def extract_candidate_text(candidate: GeminiCandidate) -> str:
    """Concatenate the text parts of a candidate, in order."""
    return "".join(part.text for part in candidate.content.parts if part.text is not None)


class RelayService:
    """
    Completion translator and model lister on top of a ``GeminiClient``.

    The ID factory and clock are injectable so responses can be made
    deterministic.
    """

    def __init__(
        self,
        client: GeminiClient,
        id_factory: Callable[[], str] = generate_completion_id,
        clock: Callable[[], float] = time.time,
    ):
        self._client = client
        self._id_factory = id_factory
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "RelayService":
        """
        Build a service whose client is configured from settings.

        Args:
            settings: Process settings
            **kwargs: Forwarded to the constructor (id_factory, clock)

        Returns:
            RelayService instance
        """
        client = GeminiClient(
            api_key=settings.google_api_key,
            base_url=settings.gemini_api_base_url,
            timeout=settings.request_timeout,
        )
        return cls(client, **kwargs)

    async def list_models(self) -> List[str]:
        """
        List upstream model names without the ``models/`` namespace.

        Returns:
            Model names in upstream order

        Raises:
            ConfigurationError: If the API key is not set
            UpstreamError: If the upstream call fails
        """
        body = await self._client.list_models()

        try:
            model_list = GeminiModelList.model_validate(body)
        except ValidationError as e:
            logger.error("Unexpected model list response: %s", e)
            raise UpstreamError(FETCH_MODELS_FAILED_MESSAGE) from e

        return [strip_model_namespace(model.name) for model in model_list.models]

    async def generate_completion(self, request: CompletionRequest) -> CompletionResponse:
        """
        Generate a chat completion through Gemini.

        Args:
            request: Completion request

        Returns:
            OpenAI-compatible completion

        Raises:
            ConfigurationError: If the API key is not set
            UpstreamError: If the upstream call fails or its response is malformed
        """
        contents = build_contents(request)
        body = await self._client.generate_content(request.model, contents)

        try:
            upstream = GeminiGenerateContentResponse.model_validate(body)
        except ValidationError as e:
            logger.error("Unexpected generateContent response: %s", e)
            raise UpstreamError(GENERATE_TEXT_FAILED_MESSAGE) from e

        return self._to_completion(request.model, upstream)

    def _to_completion(
        self,
        model: str,
        upstream: GeminiGenerateContentResponse,
    ) -> CompletionResponse:
        choices = [
            ChatCompletionChoice(
                index=index,
                message=ChatMessage(content=extract_candidate_text(candidate)),
                finish_reason=_lower_or_none(candidate.finish_reason),
            )
            for index, candidate in enumerate(upstream.candidates)
        ]

        usage = upstream.usage_metadata
        return CompletionResponse(
            id=self._id_factory(),
            created=int(self._clock()),
            model=model,
            choices=choices,
            usage=CompletionUsage(
                prompt_tokens=usage.prompt_token_count,
                completion_tokens=usage.candidates_token_count,
                total_tokens=usage.total_token_count,
            ),
            system_fingerprint=SYSTEM_FINGERPRINT,
        )


def _lower_or_none(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None
