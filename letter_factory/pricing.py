"""Estimated generation cost from token usage."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from core.constants import (
    DEFAULT_INPUT_COST_PER_MILLION,
    DEFAULT_OUTPUT_COST_PER_MILLION,
    TOKENS_PER_PRICING_UNIT,
)


@dataclass(frozen=True, slots=True)
class ModelPricing:
    """USD per one million tokens."""

    input_per_million: Decimal
    output_per_million: Decimal


DEFAULT_PRICING = ModelPricing(DEFAULT_INPUT_COST_PER_MILLION, DEFAULT_OUTPUT_COST_PER_MILLION)

# Approximate list prices; unknown models fall back to DEFAULT_PRICING
MODEL_PRICING: dict[str, ModelPricing] = {
    "anthropic/claude-3.5-sonnet": DEFAULT_PRICING,
    "claude-3-5-sonnet-20241022": DEFAULT_PRICING,
    "anthropic/claude-3-haiku": ModelPricing(Decimal("0.25"), Decimal("1.25")),
    "claude-3-haiku-20240307": ModelPricing(Decimal("0.25"), Decimal("1.25")),
    "anthropic/claude-3-opus": ModelPricing(Decimal("15.00"), Decimal("75.00")),
    "claude-3-opus-20240229": ModelPricing(Decimal("15.00"), Decimal("75.00")),
}


def get_pricing(model: str | None) -> ModelPricing:
    if model is None:
        return DEFAULT_PRICING
    return MODEL_PRICING.get(model, DEFAULT_PRICING)


def calculate_cost(input_tokens: int, output_tokens: int, model: str | None = None) -> Decimal:
    """Estimate the USD cost of a generation.

    Args:
        input_tokens: Prompt tokens reported by the service.
        output_tokens: Completion tokens reported by the service.
        model: Model identifier used to pick the rate; defaults to Claude 3.5 Sonnet rates.

    Returns:
        The unrounded cost as a Decimal.

    Raises:
        ValueError: If a token count is negative.
    """
    if input_tokens < 0 or output_tokens < 0:
        raise ValueError("Token counts cannot be negative")

    pricing = get_pricing(model)
    input_cost = Decimal(input_tokens) * pricing.input_per_million / TOKENS_PER_PRICING_UNIT
    output_cost = Decimal(output_tokens) * pricing.output_per_million / TOKENS_PER_PRICING_UNIT
    return input_cost + output_cost
