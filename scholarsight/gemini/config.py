"""Gemini configuration with environment variable loading.

Pydantic-based configuration shared by the review and chat clients.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"


def _stream_timeout_from_env() -> float | None:
    # 0 disables the per-fragment timeout
    return float(os.getenv("CHAT_STREAM_TIMEOUT", "120"))


class GeminiConfig(BaseModel):
    """Configuration for the Gemini review and chat clients.

    Attributes:
        api_key: API key for the Gemini API.
        review_model: Model used for the one-shot structured review.
        chat_model: Model used for the follow-up chat session.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        stream_timeout: Seconds to wait for each chat fragment (None = no limit).
        max_upload_mb: Largest accepted upload in megabytes.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("GOOGLE_API_KEY", "")),
        description="API key for the Gemini API",
    )
    review_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_REVIEW_MODEL", DEFAULT_MODEL),
        description="Model for structured reviews",
    )
    chat_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_CHAT_MODEL", DEFAULT_MODEL),
        description="Model for the paper chat",
    )
    temperature: float = Field(
        default=0.4,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for generation",
    )
    stream_timeout: float | None = Field(
        default_factory=_stream_timeout_from_env,
        description="Per-fragment wait limit for chat streams, in seconds",
    )
    max_upload_mb: int = Field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_MB", "10")),
        ge=1,
        le=100,
        description="Maximum upload size in megabytes",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY or GOOGLE_API_KEY in .env")
        return v.strip()

    @field_validator("stream_timeout")
    @classmethod
    def validate_stream_timeout(cls, v: float | None) -> float | None:
        """Treat zero or negative timeouts as disabled."""
        if v is not None and v <= 0:
            return None
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


def get_gemini_config() -> GeminiConfig:
    """Create Gemini configuration from environment.

    Returns:
        Configured GeminiConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return GeminiConfig()
