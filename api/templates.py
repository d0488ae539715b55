"""Template routes: variable catalog, structure validation and substitution."""

from typing import Any

from fastapi import APIRouter

from api.schemas import SubstitutionPayload, TemplatePayload, TemplateValidationResponse
from letter_templates import (
    default_template,
    extract_variables,
    list_available_variables,
    list_variables_by_group,
    substitute_variables,
    validate_template_structure,
    validate_variables,
)

router = APIRouter()


@router.get("/variables")
async def available_variables() -> dict[str, Any]:
    """List the placeholders templates may use."""
    return {
        "variables": list_available_variables(),
        "groups": list_variables_by_group(),
    }


@router.get("/default")
async def default_template_content() -> dict[str, Any]:
    """Starter template content for a new demand letter template."""
    return {"template_content": default_template().to_dict()}


@router.post("/validate", response_model=TemplateValidationResponse)
async def validate_template(payload: TemplatePayload) -> TemplateValidationResponse:
    """Check template structure and report any unrecognized placeholders."""
    structure = validate_template_structure(payload.template_content)
    if not structure.valid:
        return TemplateValidationResponse(valid=False, errors=structure.errors)

    variables = extract_variables(payload.template_content)
    check = validate_variables(variables)
    return TemplateValidationResponse(
        valid=True,
        errors=[],
        variables=variables,
        unrecognized=check.invalid,
    )


@router.post("/substitute")
async def substitute_template(payload: SubstitutionPayload) -> dict[str, Any]:
    """Fill placeholders; names without a value are left in place."""
    substituted = substitute_variables(payload.template_content, payload.values)
    return {
        "template_content": substituted.to_dict(),
        "remaining_variables": extract_variables(substituted),
    }
