"""
Gemini Relay Constants

Upstream endpoints, request defaults and the fixed messages returned by the
HTTP surface.
"""

# =============================================================================
# Upstream API
# =============================================================================

GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

# Prefix the upstream puts in front of every model identifier
MODEL_NAMESPACE_SEPARATOR = "/"

# =============================================================================
# Request Defaults
# =============================================================================

DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_PROMPT = "No prompt provided"
DEFAULT_MIME_TYPE = "text/plain"

DEFAULT_PORT = 3000

# =============================================================================
# Completion Response
# =============================================================================

COMPLETION_ID_PREFIX = "chatcmpl-"
COMPLETION_ID_LENGTH = 9
COMPLETION_OBJECT = "chat.completion"
ASSISTANT_ROLE = "assistant"

# Placeholder, there is no upstream equivalent
SYSTEM_FINGERPRINT = "fp_3aa7262c27"

# =============================================================================
# Error Messages
# =============================================================================

API_KEY_NOT_SET_MESSAGE = "API key not set"
FETCH_MODELS_FAILED_MESSAGE = "failed to fetch models"
GENERATE_TEXT_FAILED_MESSAGE = "failed to generate text"

# Client-visible bodies for 500 responses
MODELS_ERROR_RESPONSE = "Failed to fetch Gemini models"
COMPLETION_ERROR_RESPONSE = "Failed to generate response"
