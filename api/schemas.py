"""Request and response models for the Steno API."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


class TemplatePayload(BaseModel):
    """Raw template content; its structure is checked by the template validator."""

    template_content: Any = Field(description="Template JSON with a sections array.")


class SubstitutionPayload(TemplatePayload):
    values: dict[str, str | None] = Field(default_factory=dict)


class TemplateValidationResponse(BaseModel):
    valid: bool
    errors: list[str]
    variables: list[str] = Field(default_factory=list)
    unrecognized: list[str] = Field(default_factory=list)


class LetterFields(BaseModel):
    client_name: str = Field(min_length=1, max_length=255)
    defendant_name: str = Field(min_length=1, max_length=255)
    incident_date: date | None = None
    demand_amount: Decimal | None = Field(default=None, gt=0, decimal_places=2)
    case_reference: str | None = Field(default=None, max_length=100)
    injuries: str | None = None
    damages: str | None = None


class GenerateLetterPayload(BaseModel):
    letter: LetterFields
    source_documents: list[str] = Field(description="Extracted text of each source document.")
    template: dict[str, Any] | str | None = None
    template_values: dict[str, str | None] = Field(default_factory=dict)


class GenerationSummary(BaseModel):
    input_tokens: int
    output_tokens: int
    total_tokens: int
    model: str
    processing_time_ms: int
    estimated_cost: float


class GeneratedLetter(BaseModel):
    content: str
    status: str = "Generated"


class GenerateLetterResponse(BaseModel):
    letter: GeneratedLetter
    generation: GenerationSummary


class ExtractedText(BaseModel):
    filename: str | None
    mime_type: str
    text: str
    characters: int
    usable: bool
