"""Placeholder extraction, validation and substitution for letter templates.

Placeholders are written ``{{variable_name}}`` where the name is made of
word characters. Substitution walks the string fields of each section and
never round-trips the template through a serialized form, so values may
contain any characters.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from letter_templates.registry import is_known_variable
from letter_templates.structure import TemplateContent, TemplateSection, create_default_sections

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


@dataclass(slots=True)
class VariableCheck:
    """Variables split by whether the catalog knows them."""

    valid: list[str]
    invalid: list[str]

    def to_dict(self) -> dict[str, list[str]]:
        return {"valid": list(self.valid), "invalid": list(self.invalid)}


def _iter_strings(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, TemplateContent):
        yield from _iter_strings(value.to_dict())
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from _iter_strings(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _iter_strings(item)


def extract_variables(content: TemplateContent | Mapping[str, Any] | str) -> list[str]:
    """Return the distinct placeholder names used anywhere in ``content``.

    Every string field is scanned, not only section bodies. Names are
    returned once each, in first-seen order; callers should treat the result
    as a set. Never raises: content without placeholders yields ``[]``.
    """
    found: dict[str, None] = {}
    for text in _iter_strings(content):
        for match in PLACEHOLDER_PATTERN.finditer(text):
            found.setdefault(match.group(1), None)
    return list(found)


def validate_variables(variables: Iterable[str]) -> VariableCheck:
    """Partition ``variables`` into catalog and non-catalog names.

    Input order and duplicates are preserved.
    """
    valid: list[str] = []
    invalid: list[str] = []
    for variable in variables:
        (valid if is_known_variable(variable) else invalid).append(variable)
    return VariableCheck(valid=valid, invalid=invalid)


def substitute_text(text: str, values: Mapping[str, Any]) -> str:
    """Replace placeholders in a single string.

    A name that is present in ``values`` with a non-``None`` value is
    replaced by ``str(value)``, so an empty string clears the placeholder.
    Missing names and ``None`` values leave the placeholder untouched.
    Inserted values are not scanned again.
    """

    def _replace(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return PLACEHOLDER_PATTERN.sub(_replace, text)


def substitute_variables(
    content: TemplateContent | Mapping[str, Any],
    values: Mapping[str, Any],
) -> TemplateContent:
    """Return a copy of ``content`` with the supplied placeholders filled in.

    Args:
        content: Typed template content, or a raw mapping which is validated
            first.
        values: Variable name to replacement value.

    Returns:
        New TemplateContent; the input is never mutated.

    Raises:
        StructuralError: If a raw mapping is not valid template content.
    """
    template = content if isinstance(content, TemplateContent) else TemplateContent.from_dict(content)

    sections = [
        TemplateSection(
            id=substitute_text(section.id, values),
            title=substitute_text(section.title, values),
            content=substitute_text(section.content, values),
            order=section.order,
        )
        for section in template.sections
    ]
    variables = list(template.variables) if template.variables is not None else None
    return TemplateContent(sections=sections, variables=variables)


def default_template() -> TemplateContent:
    """The starter template with its variable cache filled in."""
    template = TemplateContent(sections=create_default_sections())
    template.variables = extract_variables(template)
    return template
