from __future__ import annotations

import pytest

from letter_templates import (
    AVAILABLE_VARIABLES,
    VariableGroup,
    get_variable,
    is_known_variable,
    list_available_variables,
    list_variables_by_group,
)


def test_catalog_lists_descriptions() -> None:
    variables = list_available_variables()
    assert variables["client_name"] == "Client full name"
    assert variables["attorney_bar_number"] == "Attorney bar number"
    assert len(variables) == 18


def test_catalog_iteration_is_deterministic() -> None:
    assert list(list_available_variables()) == list(list_available_variables())


def test_names_are_snake_case() -> None:
    for name in AVAILABLE_VARIABLES:
        assert name == name.lower()
        assert name.replace("_", "").isalnum()


def test_is_known_variable() -> None:
    assert is_known_variable("demand_amount") is True
    assert is_known_variable("not_a_real_var") is False


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        AVAILABLE_VARIABLES["new_var"] = None  # type: ignore[index]


def test_returned_mapping_is_a_copy() -> None:
    variables = list_available_variables()
    variables["client_name"] = "changed"
    assert list_available_variables()["client_name"] == "Client full name"


def test_get_variable() -> None:
    assert get_variable("firm_phone").group is VariableGroup.FIRM
    with pytest.raises(KeyError):
        get_variable("unknown")


def test_variables_by_group() -> None:
    groups = list_variables_by_group()
    assert groups["defendant"] == ["defendant_name", "defendant_address"]
    assert set(groups) == {group.value for group in VariableGroup}
