"""Typed template content and structural validation.

Templates arrive from the persistence layer as loosely typed JSON. They are
checked with :func:`validate_template_structure` at the boundary and only
then turned into :class:`TemplateContent`, which the rest of the pipeline
trusts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from core.exceptions import StructuralError


@dataclass(slots=True)
class TemplateSection:
    """A titled block of template text containing ``{{variable}}`` placeholders."""

    id: str
    title: str
    content: str
    order: int | float

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "order": self.order,
        }

    def render(self) -> str:
        return f"## {self.title}\n{self.content.strip()}"


@dataclass(slots=True)
class TemplateContent:
    """The ordered sections of a letter template.

    ``variables`` is an optional cache of the placeholder names found in the
    sections, stored alongside the template when it is persisted.
    """

    sections: list[TemplateSection]
    variables: list[str] | None = field(default=None)

    @classmethod
    def from_dict(cls, data: Any) -> TemplateContent:
        """Build typed content from a JSON-like value.

        Raises:
            StructuralError: With every violation if ``data`` is malformed.
        """
        validation = validate_template_structure(data)
        if not validation.valid:
            raise StructuralError(validation.errors)

        sections = [
            TemplateSection(
                id=section["id"],
                title=section["title"],
                content=section["content"],
                order=section["order"],
            )
            for section in data["sections"]
        ]
        variables = data.get("variables")
        return cls(
            sections=sections,
            variables=list(variables) if isinstance(variables, list) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"sections": [section.to_dict() for section in self.sections]}
        if self.variables is not None:
            result["variables"] = list(self.variables)
        return result

    def ordered_sections(self) -> list[TemplateSection]:
        return sorted(self.sections, key=lambda section: section.order)

    def render_text(self) -> str:
        """Flatten the sections, in order, into plain prompt text."""
        return "\n\n".join(section.render() for section in self.ordered_sections())


@dataclass(slots=True)
class StructureValidation:
    """Outcome of :func:`validate_template_structure`."""

    valid: bool
    errors: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


def _is_order_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_template_structure(content: Any) -> StructureValidation:
    """Check that ``content`` is well-formed template content.

    All section-level problems across all sections are reported; only the
    two top-level shape checks stop early, since nothing after them can be
    inspected. Section ids, titles and content must be text.

    Args:
        content: Any value claiming to be template content.

    Returns:
        A StructureValidation with ``valid`` and the ordered error messages.
    """
    errors: list[str] = []

    if isinstance(content, TemplateContent):
        content = content.to_dict()

    if not isinstance(content, Mapping):
        errors.append("Template content must be an object")
        return StructureValidation(valid=False, errors=errors)

    sections = content.get("sections")
    if not isinstance(sections, list):
        errors.append("Template must have a sections array")
        return StructureValidation(valid=False, errors=errors)

    if not sections:
        errors.append("Template must have at least one section")

    seen_ids: set[str] = set()
    seen_orders: set[int | float] = set()
    for index, section in enumerate(sections, 1):
        if not isinstance(section, Mapping):
            section = {}

        section_id = section.get("id")
        title = section.get("title")
        content = section.get("content")
        order = section.get("order")

        if not section_id:
            errors.append(f"Section {index} is missing an id")
        elif not isinstance(section_id, str):
            errors.append(f"Section {index} has a non-text id")

        if not title:
            errors.append(f"Section {index} is missing a title")
        elif not isinstance(title, str):
            errors.append(f"Section {index} has a non-text title")

        if "content" not in section:
            errors.append(f"Section {index} is missing content")
        elif content is None:
            errors.append(f"Section {index} has null content")
        elif not isinstance(content, str):
            errors.append(f"Section {index} has non-text content")

        if not _is_order_number(order):
            errors.append(f"Section {index} is missing a valid order number")

        # ids and order numbers must each be unique within the template
        if section_id and isinstance(section_id, str):
            if section_id in seen_ids:
                errors.append(f"Section {index} has a duplicate id")
            seen_ids.add(section_id)
        if _is_order_number(order):
            if order in seen_orders:
                errors.append(f"Section {index} has a duplicate order number")
            seen_orders.add(order)

    return StructureValidation(valid=not errors, errors=errors)


def create_default_sections() -> list[TemplateSection]:
    """Starter sections for a new demand letter template."""
    return [
        TemplateSection(
            id="intro",
            title="Introduction/Letterhead",
            content=(
                "<p>Dear {{defendant_name}},</p><p>This letter is written on behalf of our client, "
                "{{client_name}}, regarding the incident that occurred on {{incident_date}}.</p>"
            ),
            order=1,
        ),
        TemplateSection(
            id="facts",
            title="Statement of Facts",
            content=(
                "<p>On {{incident_date}}, at {{incident_location}}, the following events occurred:</p>"
                "<p>[Details of the incident]</p>"
            ),
            order=2,
        ),
        TemplateSection(
            id="liability",
            title="Legal Liability Analysis",
            content=(
                "<p>Based on the facts presented, {{defendant_name}} is liable for the following "
                "reasons:</p><p>[Legal analysis]</p>"
            ),
            order=3,
        ),
        TemplateSection(
            id="damages",
            title="Damages Calculation",
            content=(
                "<p>Our client has suffered the following damages:</p><p>[Itemized damages]</p>"
                "<p><strong>Total Demand: {{demand_amount}}</strong></p>"
            ),
            order=4,
        ),
        TemplateSection(
            id="demand",
            title="Demand and Settlement Terms",
            content=(
                "<p>We demand payment of {{demand_amount}} to settle this matter. "
                "This offer is valid until {{demand_deadline}}.</p>"
            ),
            order=5,
        ),
        TemplateSection(
            id="closing",
            title="Closing/Signature Block",
            content=(
                "<p>Sincerely,</p><p>{{attorney_name}}<br/>{{attorney_title}}<br/>{{firm_name}}"
                "<br/>{{firm_address}}<br/>{{firm_phone}}</p>"
            ),
            order=6,
        ),
    ]
