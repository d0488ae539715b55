"""Letter routes: source document text extraction and AI generation."""

import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.schemas import (
    ExtractedText,
    GenerateLetterPayload,
    GenerateLetterResponse,
    GeneratedLetter,
    GenerationSummary,
)
from letter_factory import DemandLetterFactory, LetterRequest
from tools.text_extraction import extract_text, validate_text_quality

logger = logging.getLogger("steno.api.letters")

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

GENERATION_RATE_LIMIT = "20/minute"

_factory: DemandLetterFactory | None = None


def configure_factory(factory: DemandLetterFactory) -> None:
    """Install the factory used by the generation route."""
    global _factory
    _factory = factory


def get_factory() -> DemandLetterFactory:
    global _factory
    if _factory is None:
        _factory = DemandLetterFactory()
    return _factory


@router.post("/documents/extract", response_model=ExtractedText)
async def extract_document_text(file: UploadFile = File(...)) -> ExtractedText:
    """Extract plain text from an uploaded PDF, DOCX or text file."""
    mime_type = (file.content_type or "").lower()
    data = await file.read()
    text = extract_text(data, mime_type)
    return ExtractedText(
        filename=file.filename,
        mime_type=mime_type,
        text=text,
        characters=len(text),
        usable=validate_text_quality(text),
    )


@router.post("/letters/generate", response_model=GenerateLetterResponse)
@limiter.limit(GENERATION_RATE_LIMIT)
async def generate_letter(request: Request, payload: GenerateLetterPayload) -> GenerateLetterResponse:
    """Generate a demand letter from case fields and source document text."""
    source_texts = [text for text in payload.source_documents if text.strip()]
    if not source_texts:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot generate letter without source documents. "
            "Please upload at least one document.",
        )

    factory = get_factory()
    letter = LetterRequest(**payload.letter.model_dump())
    result = await factory.generate(
        request=letter,
        source_texts=source_texts,
        template=payload.template,
        template_values=payload.template_values,
    )
    cost = factory.calculate_cost(result)
    request.state.generation_cost = cost

    return GenerateLetterResponse(
        letter=GeneratedLetter(content=result.content),
        generation=GenerationSummary(
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            total_tokens=result.total_tokens,
            model=result.model,
            processing_time_ms=result.processing_time_ms,
            estimated_cost=float(cost),
        ),
    )
