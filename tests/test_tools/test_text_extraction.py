from __future__ import annotations

from pathlib import Path

import docx
import pytest

from core.exceptions import TextExtractionError
from tools.text_extraction import (
    DOCX_MIME_TYPE,
    PDF_MIME_TYPE,
    TEXT_MIME_TYPE,
    extract_text,
    validate_text_quality,
)


@pytest.fixture
def medical_record_docx(tmp_path: Path) -> Path:
    document = docx.Document()
    document.add_paragraph("Patient: Jane Smith")
    document.add_paragraph("Diagnosis: fractured left wrist")
    path = tmp_path / "medical_record.docx"
    document.save(path)
    return path


class TestExtractText:
    def test_plain_text_from_bytes(self) -> None:
        assert extract_text("Police report\nNo injuries".encode(), TEXT_MIME_TYPE) == "Police report\nNo injuries"

    def test_mime_type_parameters_are_ignored(self) -> None:
        assert extract_text(b"hello", "Text/Plain; charset=utf-8") == "hello"

    def test_docx_from_path(self, medical_record_docx: Path) -> None:
        text = extract_text(medical_record_docx, DOCX_MIME_TYPE)
        assert text == "Patient: Jane Smith\nDiagnosis: fractured left wrist"

    def test_docx_from_bytes(self, medical_record_docx: Path) -> None:
        text = extract_text(medical_record_docx.read_bytes(), DOCX_MIME_TYPE)
        assert "fractured left wrist" in text

    def test_unsupported_type(self) -> None:
        with pytest.raises(TextExtractionError) as exc_info:
            extract_text(b"data", "image/png")

        assert exc_info.value.message == "Text extraction failed: Unsupported file type: image/png"
        assert exc_info.value.mime_type == "image/png"

    def test_legacy_word_documents_are_not_supported(self) -> None:
        with pytest.raises(TextExtractionError):
            extract_text(b"data", "application/msword")

    def test_corrupt_pdf(self) -> None:
        with pytest.raises(TextExtractionError) as exc_info:
            extract_text(b"this is not a pdf", PDF_MIME_TYPE)

        assert exc_info.value.mime_type == PDF_MIME_TYPE

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(TextExtractionError):
            extract_text(tmp_path / "missing.txt", TEXT_MIME_TYPE)


def test_validate_text_quality() -> None:
    assert validate_text_quality("x" * 100) is True
    assert validate_text_quality("x" * 99) is False
    assert validate_text_quality("   " + "x" * 50 + "   ") is False
