"""
Call-level failures of a generation request.
Block-level parse failures never raise; they only reduce the number of questions returned.
"""
from enum import Enum


class GenerationError(Exception):
    """Base class. `context` carries request parameters for logs (never credentials)."""

    retryable: bool = False

    def __init__(self, message: str, *, context: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"{self.message} ({details})"


class UnauthorizedError(GenerationError):
    """Provider rejected the API token (HTTP 401). Needs operator action."""


class UpstreamTimeoutError(GenerationError):
    """Generation exceeded the deadline (HTTP 504 or client-side timeout)."""

    retryable = True


class TransportError(GenerationError):
    """Network/protocol failure, or an HTTP error status other than 401/504."""

    def __init__(
        self,
        message: str,
        *,
        kind: str = "network",
        status_code: int | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.kind = kind  # "network" | "client" | "server"
        self.status_code = status_code

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.kind in ("network", "server") or self.status_code == 429


class EnvelopeFailure(str, Enum):
    NO_CHOICES = "no_choices"
    NO_MESSAGE = "no_message"
    EMPTY_CONTENT = "empty_content"
    MALFORMED_BODY = "malformed_body"


class EnvelopeError(GenerationError):
    """Response arrived but is not the expected {choices: [{message: {content}}]} shape."""

    def __init__(self, reason: EnvelopeFailure, message: str | None = None, *, context: dict | None = None) -> None:
        super().__init__(message or f"Unexpected response envelope: {reason.value}", context=context)
        self.reason = reason


class SerializationError(GenerationError):
    """Request body could not be encoded. Programming or configuration error."""
