"""Prompts for demand letter generation.

The system prompt fixes the letter's structure and tone; the user prompt
carries the case facts, the source document text and the optional template.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import MAX_SOURCE_DOCUMENT_CHARS, TRUNCATION_NOTICE
from letter_templates import TemplateContent, substitute_variables

if TYPE_CHECKING:
    from letter_factory.factory import LetterRequest

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

SYSTEM_PROMPT = """You are an expert legal writer drafting personal injury demand letters.

## Demand Letter Requirements

**Purpose**: Present the client's claim to the responsible party and demand a specific settlement.

**Tone**: Professional and persuasive, firm without being hostile. Objective about the facts.

**Structure**:
1. **Opening**: Introduce the firm, the client and the purpose of the letter
2. **Statement of Facts**: What happened, when, where and who was involved
3. **Liability**: Why the recipient is legally responsible
4. **Damages**: Itemized losses (medical expenses, lost wages, property damage, pain and suffering) with subtotals and a grand total
5. **Demand**: The settlement amount and payment terms
6. **Closing**: Response deadline and the consequences of non-compliance

**Key Guidelines**:
- Base every factual statement and figure on the supplied source documents
- Extract monetary amounts (bills, repair costs, lost wages) exactly as they appear in the sources
- Where an amount must be estimated (e.g. pain and suffering, future care), give a reasonable figure grounded in the evidence and say that it is calculated
- If a template contains $[AMOUNT] or similar placeholders, replace every one with a concrete dollar figure
- NEVER leave placeholders such as $[AMOUNT] in the final letter
- Format money consistently (e.g. $1,234.56)
- Include appropriate legal disclaimers

**Format**: Clear section headers, ready for review and sending. Length 800-2000 words.
"""

# =============================================================================
# FIELD FORMATTING
# =============================================================================

NOT_SPECIFIED = "Not specified"
TO_BE_DETERMINED = "To be determined"


def format_currency(amount: Decimal | int | float | None) -> str | None:
    """Format an amount as US dollars, e.g. ``$12,500.00``."""
    if amount is None:
        return None
    return f"${Decimal(str(amount)):,.2f}"


def format_long_date(value: date | None) -> str | None:
    """Format a date in long form, e.g. ``January 15, 2024``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return f"{value:%B} {value.day}, {value.year}"


def truncate_source_text(text: str, limit: int = MAX_SOURCE_DOCUMENT_CHARS) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:limit]}\n{TRUNCATION_NOTICE}"


# =============================================================================
# USER PROMPT
# =============================================================================

LETTER_REQUIREMENTS = [
    "Professional legal tone and language",
    "Clear section structure: opening, statement of facts, legal liability analysis, "
    "damages and injuries, demand for settlement, closing",
    "Persuasive but factual language based on the provided documents",
    "A demand amount justified by the itemized damages",
    "Standard demand letter format suitable for legal correspondence",
    "A date placeholder [DATE] at the top",
    "A signature line placeholder at the bottom",
]


def render_template(
    template: TemplateContent | str,
    values: Mapping[str, Any] | None = None,
) -> str:
    """Turn a template into prompt text, filling in the known values."""
    if isinstance(template, str):
        return template.strip()
    if values:
        template = substitute_variables(template, values)
    return template.render_text()


def build_user_prompt(
    request: LetterRequest,
    source_texts: Sequence[str],
    template: TemplateContent | str | None = None,
    template_values: Mapping[str, Any] | None = None,
) -> str:
    """Build the user prompt with all case context.

    Args:
        request: The case fields.
        source_texts: Extracted source document text, each truncated to
            5000 characters.
        template: Optional structured template or pre-rendered template text.
        template_values: Extra placeholder values; they override the values
            derived from ``request``.
    """
    sections = []

    sections.append("Generate a professional demand letter with the following information.")
    sections.append("")

    # Case information
    sections.append("## Case Information")
    sections.append(f"- Client Name: {request.client_name}")
    sections.append(f"- Defendant Name: {request.defendant_name}")
    sections.append(f"- Incident Date: {format_long_date(request.incident_date) or NOT_SPECIFIED}")
    sections.append(f"- Case Reference: {request.case_reference or NOT_SPECIFIED}")
    demand_amount = format_currency(request.demand_amount) if request.demand_amount else None
    sections.append(f"- Demand Amount: {demand_amount or TO_BE_DETERMINED}")
    if request.injuries:
        sections.append(f"- Injuries Sustained: {request.injuries}")
    if request.damages:
        sections.append(f"- Damages Description: {request.damages}")
    sections.append("")

    # Source documents
    if source_texts:
        sections.append("## Source Documents")
        sections.append("The following documents provide evidence and details about the case:")
        sections.append("")
        for i, text in enumerate(source_texts, 1):
            sections.append(f"--- Document {i} ---")
            sections.append(truncate_source_text(text))
            sections.append("")

    # Template
    if template:
        values = {**request.template_values(), **(template_values or {})}
        sections.append("## Template Structure")
        sections.append(
            "Use the following template as a structural guide. IMPORTANT: Replace ALL $[AMOUNT] "
            "placeholders with actual dollar amounts based on the source documents above. "
            "Extract specific amounts where available, or calculate reasonable estimates where needed."
        )
        sections.append("")
        sections.append(render_template(template, values))
        sections.append("")

    # Requirements
    sections.append("## Requirements")
    for i, requirement in enumerate(LETTER_REQUIREMENTS, 1):
        sections.append(f"{i}. {requirement}")
    sections.append("")
    sections.append("Generate the complete demand letter now:")

    return "\n".join(sections)
