"""Letter templates - placeholder catalog, structure checks and substitution.

Usage:
    from letter_templates import TemplateContent, extract_variables, substitute_variables

    template = TemplateContent.from_dict(stored_json)
    names = extract_variables(template)
    filled = substitute_variables(template, {"client_name": "Jane Smith"})
"""

from letter_templates.registry import (
    AVAILABLE_VARIABLES,
    TemplateVariable,
    VariableGroup,
    get_variable,
    is_known_variable,
    list_available_variables,
    list_variables_by_group,
)
from letter_templates.structure import (
    StructureValidation,
    TemplateContent,
    TemplateSection,
    create_default_sections,
    validate_template_structure,
)
from letter_templates.variables import (
    PLACEHOLDER_PATTERN,
    VariableCheck,
    default_template,
    extract_variables,
    substitute_text,
    substitute_variables,
    validate_variables,
)

__all__ = [
    # Catalog
    "AVAILABLE_VARIABLES",
    "TemplateVariable",
    "VariableGroup",
    "get_variable",
    "is_known_variable",
    "list_available_variables",
    "list_variables_by_group",
    # Structure
    "StructureValidation",
    "TemplateContent",
    "TemplateSection",
    "create_default_sections",
    "validate_template_structure",
    # Variables
    "PLACEHOLDER_PATTERN",
    "VariableCheck",
    "default_template",
    "extract_variables",
    "substitute_text",
    "substitute_variables",
    "validate_variables",
]
