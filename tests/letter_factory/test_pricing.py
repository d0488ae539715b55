from __future__ import annotations

from decimal import Decimal

import pytest

from letter_factory.pricing import DEFAULT_PRICING, calculate_cost, get_pricing


def test_default_rates_per_million_tokens() -> None:
    assert calculate_cost(1_000_000, 0) == Decimal("3.00")
    assert calculate_cost(0, 1_000_000) == Decimal("15.00")


def test_combined_cost() -> None:
    assert calculate_cost(1200, 800) == Decimal("0.0156")


def test_cost_is_linear_in_token_counts() -> None:
    single = calculate_cost(1_000_000, 1_000_000)
    double = calculate_cost(2_000_000, 2_000_000)
    assert double == single * 2
    assert single == Decimal("18")


def test_zero_tokens_cost_nothing() -> None:
    assert calculate_cost(0, 0) == 0


def test_unknown_model_uses_default_rates() -> None:
    assert get_pricing("some/unknown-model") is DEFAULT_PRICING
    assert calculate_cost(1000, 1000, "some/unknown-model") == calculate_cost(1000, 1000)


def test_known_model_rates() -> None:
    assert calculate_cost(1_000_000, 1_000_000, "anthropic/claude-3-haiku") == Decimal("1.50")


@pytest.mark.parametrize("tokens", [(-1, 0), (0, -1)])
def test_negative_token_counts_are_rejected(tokens: tuple[int, int]) -> None:
    with pytest.raises(ValueError):
        calculate_cost(*tokens)
