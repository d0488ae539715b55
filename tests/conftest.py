from __future__ import annotations

import pytest

from core.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from tools.llm_client import LLMClient, LLMCompletion

LETTER_PARAGRAPHS = [
    "[DATE]",
    "Re: Jane Smith v. Acme Logistics, Inc. - Claim No. PI-2024-0042",
    "Dear Claims Manager:",
    "This firm represents Jane Smith in connection with the injuries she suffered on "
    "January 15, 2024. We write to present her claim and to demand settlement.",
    "STATEMENT OF FACTS. On the morning of the incident, an Acme Logistics delivery truck "
    "ran a red light at Fifth Avenue and Main Street and struck Ms. Smith's vehicle. The "
    "police report confirms that the driver was cited for failure to obey a traffic signal.",
    "LIABILITY. Your driver owed a duty of care to other motorists and breached it by "
    "entering the intersection against the signal. Acme Logistics is responsible for the "
    "conduct of its employee acting within the scope of employment.",
    "DAMAGES. Ms. Smith sustained a fractured wrist and soft tissue injuries. Her medical "
    "expenses total $18,450.00, her lost wages total $6,200.00, and the property damage to "
    "her vehicle is $4,350.00. Pain and suffering is calculated at $45,000.00.",
    "DEMAND. We demand $74,000.00 in full settlement of this claim. Please respond within "
    "thirty days of the date of this letter.",
    "Sincerely,",
    "[ATTORNEY SIGNATURE]",
]

LETTER_BODY = "\n\n".join(LETTER_PARAGRAPHS)


class FakeLLMClient(LLMClient):
    """Configured client that returns canned text and records every call."""

    provider = "fake"
    default_model = "fake/letter-model"

    def __init__(self, text: str = LETTER_BODY, model: str | None = None) -> None:
        super().__init__(api_key="test-key-123", model=model)
        self.text = text
        self.reported_model: str | None = None
        self.calls: list[dict[str, object]] = []

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> LLMCompletion:
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        return LLMCompletion(
            text=self.text,
            model=self.reported_model or self.model,
            input_tokens=1200,
            output_tokens=800,
        )


@pytest.fixture
def letter_body() -> str:
    return LETTER_BODY


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def sample_template_dict() -> dict:
    return {
        "sections": [
            {
                "id": "1",
                "title": "Introduction",
                "content": "<p>Dear {{defendant_name}},</p><p>This is regarding {{client_name}}.</p>",
                "order": 1,
            },
            {
                "id": "2",
                "title": "Facts",
                "content": "<p>On {{incident_date}}, at {{incident_location}}...</p>",
                "order": 2,
            },
        ]
    }
