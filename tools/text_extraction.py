"""Plain-text extraction for uploaded source documents.

Supports PDF (pypdf), Word .docx (python-docx) and plain text. The text is
fed to letter generation, so documents whose extracted text is too short to
be useful are flagged by :func:`validate_text_quality`.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO

from docx import Document
from pypdf import PdfReader

from core.constants import MIN_EXTRACTED_TEXT_CHARS
from core.exceptions import TextExtractionError

logger = logging.getLogger("steno.text_extraction")

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME_TYPE = "text/plain"

SUPPORTED_MIME_TYPES = frozenset({PDF_MIME_TYPE, DOCX_MIME_TYPE, TEXT_MIME_TYPE})


def _open(source: str | Path | bytes) -> BinaryIO:
    if isinstance(source, bytes):
        return io.BytesIO(source)
    return open(source, "rb")


def extract_text_from_pdf(stream: BinaryIO) -> str:
    """Extract plain text from all PDF pages."""
    reader = PdfReader(stream)
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def extract_text_from_docx(stream: BinaryIO) -> str:
    """Extract paragraph text from a Word document."""
    document = Document(stream)
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_text(source: str | Path | bytes, mime_type: str) -> str:
    """Extract text from a document based on its MIME type.

    Args:
        source: Path to the file, or its raw bytes.
        mime_type: The document's MIME type.

    Returns:
        The extracted text.

    Raises:
        TextExtractionError: If the type is unsupported or parsing fails.
    """
    mime_type = (mime_type or "").split(";")[0].strip().lower()
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise TextExtractionError(mime_type, f"Unsupported file type: {mime_type or 'unknown'}")

    try:
        with _open(source) as stream:
            if mime_type == PDF_MIME_TYPE:
                text = extract_text_from_pdf(stream)
            elif mime_type == DOCX_MIME_TYPE:
                text = extract_text_from_docx(stream)
            else:
                text = stream.read().decode("utf-8", errors="replace")
    except TextExtractionError:
        raise
    except Exception as exc:
        raise TextExtractionError(mime_type, str(exc) or exc.__class__.__name__) from exc

    logger.debug(f"Extracted {len(text)} characters from {mime_type} document")
    return text


def validate_text_quality(text: str) -> bool:
    """Return True if the text is long enough to be used as a source."""
    return len(text.strip()) >= MIN_EXTRACTED_TEXT_CHARS
