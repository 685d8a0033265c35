from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gemini_relay.constants import (
    ASSISTANT_ROLE,
    COMPLETION_OBJECT,
    DEFAULT_MIME_TYPE,
    DEFAULT_MODEL,
    DEFAULT_PROMPT,
    SYSTEM_FINGERPRINT,
)


def _or_default(value: Any, default: str) -> str:
    # Absent, null and empty values all fall back to the default
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


def _is_octet(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 255


class CompletionRequest(BaseModel):
    """Simplified completion request accepted by /v1/chat/completions."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    model: str = DEFAULT_MODEL
    prompt: str = DEFAULT_PROMPT
    mime_type: str = Field(default=DEFAULT_MIME_TYPE, alias="mimeType")
    inline_data: Optional[Union[bytes, str]] = Field(default=None, alias="inlineData")

    @field_validator("model", mode="before")
    @classmethod
    def _default_model(cls, value: Any) -> str:
        return _or_default(value, DEFAULT_MODEL)

    @field_validator("prompt", mode="before")
    @classmethod
    def _default_prompt(cls, value: Any) -> str:
        return _or_default(value, DEFAULT_PROMPT)

    @field_validator("mime_type", mode="before")
    @classmethod
    def _default_mime_type(cls, value: Any) -> str:
        return _or_default(value, DEFAULT_MIME_TYPE)

    @field_validator("inline_data", mode="before")
    @classmethod
    def _empty_inline_data(cls, value: Any) -> Any:
        if not value:
            return None
        if isinstance(value, (bytes, str)):
            return value
        if isinstance(value, list) and all(_is_octet(item) for item in value):
            return bytes(value)
        return str(value)

    def inline_bytes(self) -> Optional[bytes]:
        """Inline payload as bytes, strings are UTF-8 encoded."""
        if self.inline_data is None:
            return None
        if isinstance(self.inline_data, bytes):
            return self.inline_data
        return self.inline_data.encode("utf-8")


# =============================================================================
# Upstream (Gemini) Response Schemas
# =============================================================================

class GeminiPart(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = None


class GeminiContent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parts: List[GeminiPart] = []
    role: Optional[str] = None


class GeminiCandidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content: GeminiContent = Field(default_factory=GeminiContent)
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")


class GeminiUsageMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt_token_count: int = Field(default=0, alias="promptTokenCount")
    candidates_token_count: int = Field(default=0, alias="candidatesTokenCount")
    total_token_count: int = Field(default=0, alias="totalTokenCount")


class GeminiGenerateContentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    candidates: List[GeminiCandidate]
    usage_metadata: GeminiUsageMetadata = Field(
        default_factory=GeminiUsageMetadata, alias="usageMetadata"
    )


class GeminiModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class GeminiModelList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    models: List[GeminiModel] = []


# =============================================================================
# OpenAI-compatible Response Schemas
# =============================================================================

class ChatMessage(BaseModel):
    role: str = ASSISTANT_ROLE
    content: str
    refusal: Optional[str] = None


class ChatCompletionChoice(BaseModel):
    index: int
    message: ChatMessage
    logprobs: Optional[Any] = None
    finish_reason: Optional[str] = None


class CompletionUsage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class CompletionResponse(BaseModel):
    id: str
    object: str = COMPLETION_OBJECT
    created: int
    model: str
    choices: List[ChatCompletionChoice]
    usage: CompletionUsage
    system_fingerprint: str = SYSTEM_FINGERPRINT
