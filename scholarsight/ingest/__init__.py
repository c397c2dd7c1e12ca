"""Upload ingestion for research papers.

Turns a user-selected file into a MIME type plus base64 payload.

Responsibilities:
    - Size and MIME type validation (PDF or plain text, 10MB default limit)
    - PDF header check
    - Base64 encoding for inline model requests
    - Page count and title lookup with pypdf

Validation errors are raised here and handled at the UI or HTTP boundary.
They never reach the chat aggregator.
"""

from scholarsight.ingest.document import (
    MAX_FILE_SIZE,
    DocumentValidationError,
    PDFInfo,
    UploadedDocument,
    ingest_document,
    inspect_pdf,
)

__all__ = [
    "MAX_FILE_SIZE",
    "DocumentValidationError",
    "PDFInfo",
    "UploadedDocument",
    "ingest_document",
    "inspect_pdf",
]
