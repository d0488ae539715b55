"""Custom exceptions for the demand letter pipeline.

Provides a hierarchy of exceptions for better error handling and reporting.
"""

from __future__ import annotations

from typing import Any


class StenoError(Exception):
    """Base exception for all Steno errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for JSON responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(StenoError):
    """Raised when a required setting (usually a service credential) is missing.

    Raised before any network call is attempted.
    """

    def __init__(self, setting: str, message: str) -> None:
        super().__init__(message, {"setting": setting})
        self.setting = setting


class StructuralError(StenoError):
    """Raised when template content does not have the expected shape.

    Carries every violation found, never just the first.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__(
            f"Invalid template structure: {', '.join(errors)}",
            {"errors": list(errors)},
        )
        self.errors = list(errors)


class ServiceError(StenoError):
    """Raised when the generative-text service call fails."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            f"AI API Error ({status_code or 'unknown'}): {message}",
            {"provider": provider, "status_code": status_code, **(details or {})},
        )
        self.provider = provider
        self.status_code = status_code


class GenerationTimeoutError(ServiceError):
    """Raised when the generative-text service does not answer in time."""

    def __init__(self, provider: str, timeout_seconds: float) -> None:
        super().__init__(
            provider,
            f"request timed out after {timeout_seconds:g} seconds",
            details={"timeout_seconds": timeout_seconds},
        )
        self.timeout_seconds = timeout_seconds


class ContentQualityError(StenoError):
    """Raised when generated letter text fails the quality heuristics."""

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(f"Content validation failed: {message}", {"rule": rule})
        self.rule = rule


class TextExtractionError(StenoError):
    """Raised when text cannot be extracted from an uploaded document."""

    def __init__(self, mime_type: str, message: str) -> None:
        super().__init__(f"Text extraction failed: {message}", {"mime_type": mime_type})
        self.mime_type = mime_type
