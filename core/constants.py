"""Constants for the demand letter pipeline.

Centralizes magic numbers and configuration values for easier maintenance.
"""

from decimal import Decimal

# LLM generation defaults
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.3  # Low randomness for consistent legal prose
REQUEST_TIMEOUT_SECONDS = 120.0

# Prompt assembly
MAX_SOURCE_DOCUMENT_CHARS = 5000
TRUNCATION_NOTICE = "[Document truncated for length]"

# Generated letter validation
MIN_LETTER_CHARS = 500
MAX_LETTER_CHARS = 15000
MIN_SECTION_SIGNALS = 2  # Of the four topical signals
MAX_REPEATED_CHARS = 10  # Longer runs of one character count as gibberish

# Source document extraction
MIN_EXTRACTED_TEXT_CHARS = 100

# Pricing (USD per 1M tokens, Claude 3.5 Sonnet)
TOKENS_PER_PRICING_UNIT = Decimal(1_000_000)
DEFAULT_INPUT_COST_PER_MILLION = Decimal("3.00")
DEFAULT_OUTPUT_COST_PER_MILLION = Decimal("15.00")
