"""Letter Factory - Single-call demand letter generation.

This module takes the case fields of a letter, the text extracted from its
source documents and an optional template, and produces a validated letter
body in a single LLM call.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from core.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from core.exceptions import ServiceError
from letter_factory.pricing import calculate_cost
from letter_factory.prompts import SYSTEM_PROMPT, build_user_prompt, format_currency, format_long_date
from letter_factory.quality import validate_letter_content
from letter_templates import TemplateContent
from tools.llm_client import LLMClient, get_llm_client

logger = logging.getLogger("steno.letter_factory")


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value)).date()


def _parse_amount(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid demand amount: {value!r}") from exc


@dataclass
class LetterRequest:
    """Case fields used to generate a demand letter."""

    client_name: str
    defendant_name: str
    incident_date: date | None = None
    demand_amount: Decimal | None = None
    case_reference: str | None = None
    injuries: str | None = None
    damages: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LetterRequest:
        """Create a LetterRequest from a dictionary.

        Accepts ISO date strings and numeric strings.
        """
        return cls(
            client_name=data["client_name"],
            defendant_name=data["defendant_name"],
            incident_date=_parse_date(data.get("incident_date")),
            demand_amount=_parse_amount(data.get("demand_amount")),
            case_reference=data.get("case_reference"),
            injuries=data.get("injuries"),
            damages=data.get("damages"),
        )

    def template_values(self) -> dict[str, str | None]:
        """Placeholder values derived from the case fields.

        Absent fields, and a zero demand amount, map to ``None`` so their
        placeholders stay in place.
        """
        return {
            "client_name": self.client_name,
            "defendant_name": self.defendant_name,
            "incident_date": format_long_date(self.incident_date),
            "demand_amount": format_currency(self.demand_amount) if self.demand_amount else None,
            "case_reference": self.case_reference,
        }


@dataclass(frozen=True)
class GenerationResult:
    """A generated letter body with the usage reported by the service."""

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    processing_time_ms: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "content": self.content,
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
            "model": self.model,
            "processing_time_ms": self.processing_time_ms,
        }


class DemandLetterFactory:
    """Factory for generating demand letters with a single LLM call.

    1. Checks that the LLM credential is configured
    2. Builds the prompt from case fields, source texts and template
    3. Makes a single LLM call
    4. Validates the generated letter
    5. Returns the letter with its token usage

    Nothing is retried; every failure propagates to the caller.

    Example:
        factory = DemandLetterFactory()
        result = await factory.generate(
            request=LetterRequest(client_name="Jane Smith", defendant_name="Acme Corp"),
            source_texts=[police_report_text],
        )
        print(result.content)
    """

    def __init__(
        self,
        client: LLMClient | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        """Initialize the letter factory.

        Args:
            client: The LLM client (defaults to the global client)
            max_tokens: Maximum tokens for generation
            temperature: Sampling temperature; kept low for consistent output
        """
        self.client = client or get_llm_client()
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(
        self,
        request: LetterRequest | Mapping[str, Any],
        source_texts: Sequence[str],
        template: TemplateContent | Mapping[str, Any] | str | None = None,
        template_values: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Generate a demand letter.

        Args:
            request: The case fields
            source_texts: Text extracted from the letter's source documents
            template: Optional template (typed, raw JSON, or plain text)
            template_values: Extra placeholder values such as firm details

        Returns:
            A GenerationResult with the validated letter

        Raises:
            ConfigurationError: If the LLM credential is missing
            StructuralError: If a raw template is malformed
            ServiceError: If the LLM call fails or returns nothing
            ContentQualityError: If the letter fails the quality gate
        """
        self.client.ensure_configured()

        if isinstance(request, Mapping):
            request = LetterRequest.from_dict(request)
        if isinstance(template, Mapping):
            template = TemplateContent.from_dict(template)

        user_prompt = build_user_prompt(request, source_texts, template, template_values)
        logger.info(
            f"Generating demand letter for {request.client_name} v. {request.defendant_name} "
            f"({len(source_texts)} source documents, template: {template is not None})"
        )

        start = time.perf_counter()
        completion = await self.client.complete(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        processing_time_ms = int((time.perf_counter() - start) * 1000)

        if not completion.text.strip():
            raise ServiceError(self.client.provider, "No content generated from AI model")

        validate_letter_content(completion.text)

        logger.info(
            f"Generated {len(completion.text)} characters with {completion.model} "
            f"({completion.input_tokens} in / {completion.output_tokens} out, {processing_time_ms}ms)"
        )

        return GenerationResult(
            content=completion.text,
            input_tokens=completion.input_tokens,
            output_tokens=completion.output_tokens,
            model=completion.model,
            processing_time_ms=processing_time_ms,
        )

    @staticmethod
    def calculate_cost(result: GenerationResult) -> Decimal:
        """Estimated USD cost of a generation."""
        return calculate_cost(result.input_tokens, result.output_tokens, result.model)


# Convenience function for simple usage
async def generate_letter(
    request: LetterRequest | Mapping[str, Any],
    source_texts: Sequence[str],
    template: TemplateContent | Mapping[str, Any] | str | None = None,
    **kwargs: Any,
) -> GenerationResult:
    """Generate a demand letter with the default client.

    Args:
        request: The case fields
        source_texts: Text extracted from the source documents
        template: Optional template
        **kwargs: Passed to ``DemandLetterFactory.generate`` (e.g. template_values)
    """
    factory = DemandLetterFactory()
    return await factory.generate(request, source_texts, template, **kwargs)
