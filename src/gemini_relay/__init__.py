"""
Gemini Relay

An OpenAI-style HTTP relay for the Google Gemini generative-language API.
Exposes model listing and chat completions, translating request and
response shapes on the way through.
"""

__version__ = "0.1.0"

from .client import (
    GeminiClient,
    RelayError,
    ConfigurationError,
    UpstreamError,
)
from .config import Settings, get_settings
from .service import (
    RelayService,
    build_contents,
    generate_completion_id,
    strip_model_namespace,
)


__all__ = [
    # Main service
    "RelayService",
    "build_contents",
    "generate_completion_id",
    "strip_model_namespace",

    # Client
    "GeminiClient",

    # Exceptions
    "RelayError",
    "ConfigurationError",
    "UpstreamError",

    # Configuration
    "Settings",
    "get_settings",
]
