"""Paper upload endpoint for structured reviews.

Handles file upload, validation, encoding, and the review request.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from scholarsight.gemini.review_client import (
    ReviewClient,
    ReviewConfigError,
    ReviewError,
    get_review_client,
)
from scholarsight.ingest.document import DocumentValidationError, ingest_document, inspect_pdf
from scholarsight.models.schemas import ReviewUploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/review", tags=["review"])


def _validate_filename(filename: str | None) -> str:
    """Validate that the upload carries a filename.

    Raises:
        HTTPException: 400 if the filename is missing.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )
    return filename


@router.post("/upload", response_model=ReviewUploadResponse)
async def upload_paper(
    file: UploadFile,
    review_client: Annotated[ReviewClient, Depends(get_review_client)],
) -> ReviewUploadResponse:
    """Upload a paper and generate its review.

    Args:
        file: The uploaded PDF or text file (multipart/form-data).
        review_client: Client used for the review request.

    Returns:
        ReviewUploadResponse with file details and the review.

    Raises:
        400: Empty file, unsupported type, or invalid PDF header.
        413: File exceeds the size limit.
        502: The model request failed or returned an invalid review.
        503: No Gemini API key is configured.
    """
    filename = _validate_filename(file.filename)
    content = await file.read()

    try:
        document = ingest_document(content, file.content_type, filename)
    except DocumentValidationError as e:
        raise HTTPException(
            status_code=(
                status.HTTP_413_CONTENT_TOO_LARGE if e.too_large else status.HTTP_400_BAD_REQUEST
            ),
            detail=str(e),
        ) from e

    try:
        review = await review_client.generate_review(document)
    except ReviewConfigError as e:
        logger.error(f"Review unavailable for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Review service is not configured",
        ) from e
    except ReviewError as e:
        logger.warning(f"Review failed for {filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to analyze the paper",
        ) from e

    pages = None
    if document.mime_type == "application/pdf":
        info = inspect_pdf(content)
        pages = info.pages if info else None

    logger.info(f"Reviewed {filename}: {review.decision.value}")
    return ReviewUploadResponse(
        filename=filename,
        mime_type=document.mime_type,
        size=document.size,
        pages=pages,
        review=review,
    )
