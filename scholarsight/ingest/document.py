"""Document ingestion for uploaded papers.

Validates uploads and converts them into a MIME type plus base64 payload
that can be sent inline to the model.
"""

import base64
import io
import logging

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)

# Constants
MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE = MAX_FILE_SIZE_MB * 1024 * 1024
PDF_MAGIC_BYTES = b"%PDF"
SUPPORTED_MIME_TYPES = frozenset({"application/pdf", "text/plain"})


class DocumentValidationError(Exception):
    """Raised when an upload is rejected before reaching the model."""

    def __init__(self, message: str, *, too_large: bool = False) -> None:
        super().__init__(message)
        self.too_large = too_large


class UploadedDocument(BaseModel):
    """A validated upload, encoded for transport.

    Attributes:
        name: Original file name.
        mime_type: Either application/pdf or text/plain.
        data: Base64 encoding of the file content.
        size: File size in bytes.
    """

    name: str
    mime_type: str
    data: str
    size: int = Field(ge=0)

    def raw_bytes(self) -> bytes:
        """Decode the transport payload back into the original bytes."""
        return base64.b64decode(self.data)


class PDFInfo(BaseModel):
    """Page count and title read from a PDF."""

    pages: int = Field(ge=0)
    title: str | None = None


def _validate_upload(content: bytes, mime_type: str | None, max_bytes: int) -> str:
    """Validate upload content and type.

    Args:
        content: Raw bytes of the file.
        mime_type: Declared MIME type of the file.
        max_bytes: Largest accepted size.

    Returns:
        The normalized MIME type.

    Raises:
        DocumentValidationError: If validation fails.
    """
    if not content:
        raise DocumentValidationError("Empty file provided")

    if len(content) > max_bytes:
        max_mb = max_bytes // (1024 * 1024)
        raise DocumentValidationError(
            f"File is too large. Max size is {max_mb}MB.", too_large=True
        )

    normalized = (mime_type or "").split(";")[0].strip().lower()
    if normalized not in SUPPORTED_MIME_TYPES:
        raise DocumentValidationError("Only PDF and TXT files are supported.")

    if normalized == "application/pdf" and not content.lstrip()[:10].startswith(PDF_MAGIC_BYTES):
        raise DocumentValidationError("Invalid PDF: file does not start with PDF header")

    return normalized


def ingest_document(
    content: bytes,
    mime_type: str | None,
    name: str,
    max_bytes: int = MAX_FILE_SIZE,
) -> UploadedDocument:
    """Validate an upload and encode it for the model.

    Args:
        content: Raw bytes of the file.
        mime_type: Declared MIME type of the file.
        name: Original file name.
        max_bytes: Largest accepted size (10MB by default).

    Returns:
        UploadedDocument carrying the base64 payload and MIME type.

    Raises:
        DocumentValidationError: If the file is empty, too large, of an
            unsupported type, or a PDF without a PDF header.
    """
    try:
        normalized = _validate_upload(content, mime_type, max_bytes)
    except DocumentValidationError as e:
        logger.warning(f"Rejected upload {name!r}: {e}")
        raise

    return UploadedDocument(
        name=name,
        mime_type=normalized,
        data=base64.b64encode(content).decode("ascii"),
        size=len(content),
    )


def inspect_pdf(content: bytes) -> PDFInfo | None:
    """Read page count and title from a PDF.

    Best effort: the model receives the raw bytes either way, so a PDF that
    pypdf cannot read is not an ingestion error.

    Args:
        content: Raw bytes of the PDF file.

    Returns:
        PDFInfo, or None if the file could not be read.
    """
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = len(reader.pages)
        title = reader.metadata.get("/Title") if reader.metadata else None
    except PdfReadError as e:
        logger.warning(f"Could not read PDF structure: {e}")
        return None
    except Exception as e:
        logger.warning(f"Failed to inspect PDF: {e}")
        return None

    return PDFInfo(pages=pages, title=str(title) if title else None)
