"""LLM clients for the generative-text service behind letter generation.

Two providers are supported:

* ``OpenRouterClient`` posts to an OpenAI-compatible chat-completions
  endpoint (OpenRouter by default) with a bearer credential.
* ``AnthropicClient`` calls the Anthropic Messages API through the official
  SDK.

Both report the generated text together with the model that actually
answered and the token usage. Neither retries: a failed call surfaces
immediately as a :class:`ServiceError` and the caller decides what to do.
A missing or placeholder credential is detected before any network call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import anthropic
import httpx
from anthropic import AsyncAnthropic

from core.config import get_settings, is_placeholder_credential
from core.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, REQUEST_TIMEOUT_SECONDS
from core.exceptions import ConfigurationError, GenerationTimeoutError, ServiceError

logger = logging.getLogger("steno.llm_client")


@dataclass(frozen=True, slots=True)
class LLMCompletion:
    """Text and usage returned by a single completion call."""

    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class LLMClient:
    """Base class for generative-text providers."""

    provider: str = "llm"
    credential_setting: str = "api_key"
    default_model: str = ""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.default_model
        self.timeout_seconds = timeout_seconds

    @property
    def is_configured(self) -> bool:
        return not is_placeholder_credential(self.api_key)

    def ensure_configured(self) -> str:
        """Return the credential or fail before any network call.

        Raises:
            ConfigurationError: If the credential is missing or a placeholder.
        """
        if not self.is_configured:
            name = self.credential_setting.upper()
            raise ConfigurationError(
                self.credential_setting,
                f"{name} is not configured. Please set a valid API key in environment variables.",
            )
        return self.api_key

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> LLMCompletion:
        raise NotImplementedError


class OpenRouterClient(LLMClient):
    """Client for an OpenAI-compatible chat-completions endpoint."""

    provider = "openrouter"
    credential_setting = "openrouter_api_key"
    default_model = "anthropic/claude-3.5-sonnet"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
        api_url: str = "https://openrouter.ai/api/v1/chat/completions",
        app_url: str | None = None,
        app_title: str | None = None,
    ) -> None:
        super().__init__(api_key=api_key, model=model, timeout_seconds=timeout_seconds)
        self.api_url = api_url
        self.app_url = app_url
        self.app_title = app_title

    def _headers(self, api_key: str) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if self.app_url:
            headers["HTTP-Referer"] = self.app_url
        if self.app_title:
            headers["X-Title"] = self.app_title
        return headers

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if isinstance(error, str):
                return error
        return response.reason_phrase

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> LLMCompletion:
        api_key = self.ensure_configured()

        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }

        logger.debug(
            f"Calling OpenRouter (model: {self.model}, max_tokens: {max_tokens}, "
            f"temperature: {temperature})"
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers=self._headers(api_key),
                )
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise GenerationTimeoutError(self.provider, self.timeout_seconds) from exc
        except httpx.HTTPStatusError as exc:
            raise ServiceError(
                self.provider,
                self._error_message(exc.response),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ServiceError(self.provider, str(exc) or exc.__class__.__name__) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ServiceError(self.provider, "Invalid response from AI service") from exc

        completion = self._parse_completion(data)
        logger.debug(f"Received response from OpenRouter ({len(completion.text)} chars)")
        return completion

    def _parse_completion(self, data: Any) -> LLMCompletion:
        """Read text, model and usage from a chat-completions body.

        Raises:
            ServiceError: If the body does not have the chat-completions shape.
        """
        if not isinstance(data, dict):
            raise ServiceError(self.provider, "Invalid response from AI service")

        choices = data.get("choices") or []
        if not isinstance(choices, list):
            raise ServiceError(self.provider, "Invalid response from AI service")

        message: Any = {}
        if choices:
            first = choices[0]
            message = first.get("message") if isinstance(first, dict) else None
            if not isinstance(message, dict):
                raise ServiceError(self.provider, "Invalid response from AI service")

        text = message.get("content") or ""
        if not isinstance(text, str):
            raise ServiceError(self.provider, "Invalid response from AI service")

        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}

        return LLMCompletion(
            text=text,
            model=data.get("model") or self.model,
            input_tokens=usage.get("prompt_tokens") or 0,
            output_tokens=usage.get("completion_tokens") or 0,
        )


class AnthropicClient(LLMClient):
    """Client for the Anthropic Messages API."""

    provider = "anthropic"
    credential_setting = "anthropic_api_key"
    default_model = "claude-3-5-sonnet-20241022"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(api_key=api_key, model=model, timeout_seconds=timeout_seconds)
        self._client: AsyncAnthropic | None = None

    @property
    def client(self) -> AsyncAnthropic:
        # The SDK refuses to build without a key, so create it lazily
        if self._client is None:
            self._client = AsyncAnthropic(
                api_key=self.ensure_configured(),
                timeout=self.timeout_seconds,
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> LLMCompletion:
        client = self.client

        logger.debug(
            f"Calling Anthropic API (model: {self.model}, max_tokens: {max_tokens}, "
            f"temperature: {temperature})"
        )

        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APITimeoutError as exc:
            raise GenerationTimeoutError(self.provider, self.timeout_seconds) from exc
        except anthropic.APIStatusError as exc:
            raise ServiceError(self.provider, exc.message, status_code=exc.status_code) from exc
        except anthropic.APIError as exc:
            raise ServiceError(self.provider, exc.message) from exc

        text = "\n".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        logger.debug(f"Received response from Anthropic API ({len(text)} chars)")
        return LLMCompletion(
            text=text,
            model=response.model or self.model,
            input_tokens=response.usage.input_tokens or 0,
            output_tokens=response.usage.output_tokens or 0,
        )


def create_llm_client(provider: str | None = None) -> LLMClient:
    """Build a client for ``provider`` (default: ``settings.llm_provider``)."""
    settings = get_settings()
    provider = (provider or settings.llm_provider).lower()

    if provider == "openrouter":
        return OpenRouterClient(
            api_key=settings.openrouter_api_key,
            model=settings.llm_model,
            timeout_seconds=settings.llm_timeout_seconds,
            api_url=settings.openrouter_api_url,
            app_url=settings.app_url,
            app_title=settings.app_title,
        )
    if provider == "anthropic":
        return AnthropicClient(
            api_key=settings.anthropic_api_key,
            model=settings.llm_model,
            timeout_seconds=settings.llm_timeout_seconds,
        )
    raise ValueError(f"Unsupported LLM provider: {provider}")


# Global singleton for easy access
_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = create_llm_client()
    return _llm_client


def set_llm_client(client: LLMClient | None) -> None:
    """Set the global LLM client instance (useful for testing)."""
    global _llm_client
    _llm_client = client
