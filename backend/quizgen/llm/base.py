"""
Transport interface for the model-serving endpoint.
Implementations classify failures into quizgen.exceptions; the generator never sees HTTP details.
"""
from typing import Protocol


class ChatCompletionTransport(Protocol):
    """Send one encoded Chat Completions request, return the raw response body."""

    def send(self, body: bytes) -> str:
        """
        POST body (JSON) and return the response text on success.
        Raises UnauthorizedError (401), UpstreamTimeoutError (504 or client timeout),
        TransportError (any other HTTP error or network failure).
        """
        ...

    def close(self) -> None:
        """Release connections the transport opened itself."""
        ...

    def __enter__(self) -> "ChatCompletionTransport":
        ...

    def __exit__(self, *exc_info) -> None:
        ...
