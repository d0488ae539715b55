"""Letter Factory - AI generation of demand letters.

- Single LLM call per letter
- Case fields, source document text and an optional template in one prompt
- Quality gate on the generated text
- Token usage and estimated cost reporting

Usage:
    from letter_factory import DemandLetterFactory, LetterRequest

    factory = DemandLetterFactory()
    result = await factory.generate(
        request=LetterRequest(client_name="Jane Smith", defendant_name="Acme Corp"),
        source_texts=[medical_records_text],
        template=template_content,
    )
    print(result.content, factory.calculate_cost(result))
"""

from letter_factory.factory import (
    DemandLetterFactory,
    GenerationResult,
    LetterRequest,
    generate_letter,
)
from letter_factory.pricing import (
    MODEL_PRICING,
    ModelPricing,
    calculate_cost,
)
from letter_factory.prompts import (
    SYSTEM_PROMPT,
    build_user_prompt,
)
from letter_factory.quality import (
    QualityReport,
    check_letter_content,
    validate_letter_content,
)

__all__ = [
    # Main classes
    "DemandLetterFactory",
    "GenerationResult",
    "LetterRequest",
    # Convenience function
    "generate_letter",
    # Pricing
    "MODEL_PRICING",
    "ModelPricing",
    "calculate_cost",
    # Prompts
    "SYSTEM_PROMPT",
    "build_user_prompt",
    # Quality
    "QualityReport",
    "check_letter_content",
    "validate_letter_content",
]
