from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Decision(str, Enum):
    """Final recommendation values allowed by the review schema."""

    ACCEPT = "Accept"
    MINOR_REVISION = "Minor Revision"
    MAJOR_REVISION = "Major Revision"
    REJECT = "Reject"


class PaperScores(BaseModel):
    """Scoring breakdown for a paper, each on a closed 1-10 scale."""

    novelty: float = Field(..., ge=1, le=10)
    methodology: float = Field(..., ge=1, le=10)
    clarity: float = Field(..., ge=1, le=10)
    significance: float = Field(..., ge=1, le=10)
    citations: float = Field(..., ge=1, le=10)


class ReviewData(BaseModel):
    """Structured peer review returned by the model.

    Attributes:
        title: Paper title.
        authors: Detected authors. Defaults to an empty list when omitted.
        summary: Concise summary of the paper.
        scores: The five sub-scores.
        strengths: Key strengths.
        weaknesses: Key weaknesses.
        detailed_feedback: Free-text feedback (``detailedFeedback`` on the wire).
        decision: Final recommendation.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str
    authors: list[str] = Field(default_factory=list)
    summary: str
    scores: PaperScores
    strengths: list[str]
    weaknesses: list[str]
    detailed_feedback: str = Field(..., alias="detailedFeedback")
    decision: Decision

    @field_validator("authors", mode="before")
    @classmethod
    def default_authors(cls, v: list[str] | None) -> list[str]:
        """Accept an explicit null for authors as an empty list."""
        return [] if v is None else v


class ReviewUploadResponse(BaseModel):
    """Response after a paper upload has been reviewed.

    Attributes:
        filename: Name of the uploaded file.
        mime_type: MIME type the document was sent with.
        size: Size of the document in bytes.
        pages: Page count for PDFs, when it could be read.
        review: The generated review.
    """

    filename: str
    mime_type: str
    size: int = Field(ge=0)
    pages: int | None = None
    review: ReviewData
