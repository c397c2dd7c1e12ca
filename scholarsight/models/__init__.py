"""Pydantic models for the review schema and API responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Decision: Final recommendation enumeration
    - PaperScores: Five 1-10 sub-scores
    - ReviewData: Structured review returned by the model
    - ReviewUploadResponse: Upload endpoint response
"""

from scholarsight.models.schemas import Decision, PaperScores, ReviewData, ReviewUploadResponse

__all__ = ["Decision", "PaperScores", "ReviewData", "ReviewUploadResponse"]
