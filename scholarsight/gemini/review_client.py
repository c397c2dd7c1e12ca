"""Structured paper review via the Gemini API.

Sends the uploaded document inline with a strict JSON response schema and
validates the reply into a ReviewData record. A review either parses
completely or fails; there is no partial result.
"""

import logging
import re

from google import genai
from google.genai import errors, types
from pydantic import ValidationError

from scholarsight.gemini.config import GeminiConfig, get_gemini_config
from scholarsight.gemini.prompts import (
    REVIEW_PROMPT,
    REVIEW_RESPONSE_SCHEMA,
    SYSTEM_INSTRUCTION_REVIEWER,
)
from scholarsight.ingest.document import UploadedDocument
from scholarsight.models.schemas import ReviewData

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?")


class ReviewError(Exception):
    """Raised when a review cannot be produced."""

    pass


class ReviewTransportError(ReviewError):
    """The request to the model failed."""

    pass


class ReviewSchemaError(ReviewError):
    """The model replied with text that is not a valid review."""

    pass


class ReviewConfigError(ReviewError):
    """No usable Gemini configuration, usually a missing API key."""

    pass


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers wrapping a JSON reply."""
    return _CODE_FENCE.sub("", text).strip()


def parse_review(text: str | None) -> ReviewData:
    """Parse the model's reply into a ReviewData record.

    Args:
        text: Raw response text, possibly wrapped in code fences.

    Returns:
        The validated review.

    Raises:
        ReviewSchemaError: If the text is empty, not JSON, or does not
            match the review schema.
    """
    if not text or not text.strip():
        raise ReviewSchemaError("No response text generated")

    try:
        return ReviewData.model_validate_json(strip_code_fences(text))
    except ValidationError as e:
        raise ReviewSchemaError(f"Review does not match schema: {e}") from e


class ReviewClient:
    """Client for one-shot structured reviews."""

    def __init__(
        self,
        config: GeminiConfig | None = None,
        client: genai.Client | None = None,
    ) -> None:
        """Initialize the review client.

        Configuration and the SDK client are resolved on the first review,
        so a missing API key surfaces as ReviewConfigError rather than at
        construction.

        Args:
            config: Optional Gemini configuration.
                    Loads from environment if not provided.
            client: Optional pre-built SDK client.
        """
        self._config = config
        self._client = client

    def _resolve(self) -> tuple[GeminiConfig, genai.Client]:
        if self._config is None:
            try:
                self._config = get_gemini_config()
            except ValueError as e:
                raise ReviewConfigError(f"Gemini is not configured: {e}") from e
        if self._client is None:
            self._client = genai.Client(api_key=self._config.api_key)
        return self._config, self._client

    @staticmethod
    def _build_config(config: GeminiConfig) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=SYSTEM_INSTRUCTION_REVIEWER,
            response_mime_type="application/json",
            response_schema=REVIEW_RESPONSE_SCHEMA,
            temperature=config.temperature,
        )

    async def generate_review(self, document: UploadedDocument) -> ReviewData:
        """Generate a structured review of a paper.

        Args:
            document: The validated, base64-encoded upload.

        Returns:
            The parsed review.

        Raises:
            ReviewConfigError: If no API key is configured.
            ReviewTransportError: If the API call fails.
            ReviewSchemaError: If the reply is not a valid review.
        """
        config, client = self._resolve()
        contents = [
            types.Part.from_bytes(data=document.raw_bytes(), mime_type=document.mime_type),
            REVIEW_PROMPT,
        ]

        try:
            response = await client.aio.models.generate_content(
                model=config.review_model,
                contents=contents,
                config=self._build_config(config),
            )
        except errors.APIError as e:
            logger.error(f"Gemini API error {e.code} for {document.name}: {e.message}")
            raise ReviewTransportError(f"Gemini API error {e.code}: {e.message}") from e
        except Exception as e:
            logger.error(f"Review request failed for {document.name}: {e}")
            raise ReviewTransportError(f"Review request failed: {e}") from e

        try:
            review = parse_review(response.text)
        except ReviewSchemaError as e:
            logger.error(f"Unusable review for {document.name}: {e}")
            raise

        logger.info(f"Generated review for {document.name}: {review.decision.value}")
        return review


# Module-level singleton instance
_review_client: ReviewClient | None = None


def get_review_client() -> ReviewClient:
    """Get or create the global review client.

    Returns:
        The ReviewClient instance.
    """
    global _review_client
    if _review_client is None:
        _review_client = ReviewClient()
    return _review_client
