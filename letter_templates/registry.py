"""Template Variables Registry - Defines the placeholders a letter template may use."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class VariableGroup(Enum):
    """What part of the case a variable describes."""
    CLIENT = "client"
    DEFENDANT = "defendant"
    INCIDENT = "incident"
    DEMAND = "demand"
    FIRM = "firm"
    ATTORNEY = "attorney"
    CASE = "case"


@dataclass(frozen=True)
class TemplateVariable:
    """A placeholder usable as ``{{name}}`` inside template sections."""
    name: str
    description: str
    group: VariableGroup


def _variable(name: str, description: str, group: VariableGroup) -> tuple[str, TemplateVariable]:
    return name, TemplateVariable(name=name, description=description, group=group)


# =============================================================================
# VARIABLE CATALOG
# =============================================================================

AVAILABLE_VARIABLES: MappingProxyType[str, TemplateVariable] = MappingProxyType(dict([

    # Client information
    _variable("client_name", "Client full name", VariableGroup.CLIENT),
    _variable("client_address", "Client address", VariableGroup.CLIENT),
    _variable("client_phone", "Client phone number", VariableGroup.CLIENT),
    _variable("client_email", "Client email address", VariableGroup.CLIENT),

    # Defendant information
    _variable("defendant_name", "Defendant full name", VariableGroup.DEFENDANT),
    _variable("defendant_address", "Defendant address", VariableGroup.DEFENDANT),

    # Incident information
    _variable("incident_date", "Date of incident", VariableGroup.INCIDENT),
    _variable("incident_location", "Location of incident", VariableGroup.INCIDENT),

    # Demand information
    _variable("demand_amount", "Demand amount", VariableGroup.DEMAND),
    _variable("demand_deadline", "Deadline for response", VariableGroup.DEMAND),

    # Firm information
    _variable("firm_name", "Law firm name", VariableGroup.FIRM),
    _variable("firm_address", "Law firm address", VariableGroup.FIRM),
    _variable("firm_phone", "Law firm phone number", VariableGroup.FIRM),

    # Attorney information
    _variable("attorney_name", "Attorney name", VariableGroup.ATTORNEY),
    _variable("attorney_title", "Attorney title", VariableGroup.ATTORNEY),
    _variable("attorney_bar_number", "Attorney bar number", VariableGroup.ATTORNEY),

    # Case information
    _variable("case_reference", "Case reference number", VariableGroup.CASE),
    _variable("case_type", "Type of case", VariableGroup.CASE),
]))


def list_available_variables() -> dict[str, str]:
    """Map every known variable name to its description, in catalog order."""
    return {name: variable.description for name, variable in AVAILABLE_VARIABLES.items()}


def is_known_variable(name: str) -> bool:
    return name in AVAILABLE_VARIABLES


def get_variable(name: str) -> TemplateVariable:
    """Get a catalog entry by name.

    Raises:
        KeyError: If the variable is not in the catalog.
    """
    if name not in AVAILABLE_VARIABLES:
        raise KeyError(
            f"Unknown template variable: {name}. "
            f"Available: {', '.join(AVAILABLE_VARIABLES)}"
        )
    return AVAILABLE_VARIABLES[name]


def list_variables_by_group() -> dict[str, list[str]]:
    """List variable names grouped by ``VariableGroup`` value."""
    result: dict[str, list[str]] = {}
    for name, variable in AVAILABLE_VARIABLES.items():
        result.setdefault(variable.group.value, []).append(name)
    return result
