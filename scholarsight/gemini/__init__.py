"""Gemini API clients for paper review and chat.

Responsibilities:
    - One-shot structured review with a strict JSON response schema
    - Chat sessions seeded with the uploaded paper
    - Configuration loading from the environment

Built on the google-genai SDK's async client. Keeps the rest of the
application independent of SDK types.
"""

from scholarsight.gemini.chat_client import GeminiChatContext, open_chat_session
from scholarsight.gemini.config import GeminiConfig, get_gemini_config
from scholarsight.gemini.review_client import (
    ReviewClient,
    ReviewConfigError,
    ReviewError,
    ReviewSchemaError,
    ReviewTransportError,
    get_review_client,
    parse_review,
)

__all__ = [
    "GeminiChatContext",
    "GeminiConfig",
    "ReviewClient",
    "ReviewConfigError",
    "ReviewError",
    "ReviewSchemaError",
    "ReviewTransportError",
    "get_gemini_config",
    "get_review_client",
    "open_chat_session",
    "parse_review",
]
