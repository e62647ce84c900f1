"""
Chat Completions response envelope: {"choices": [{"message": {"role", "content"}}]}.
Only choices[0].message.content is read; the parser never sees the envelope.
"""
import json
import logging
from typing import Any

from quizgen.exceptions import EnvelopeError, EnvelopeFailure

logger = logging.getLogger(__name__)


def _decode(body: str | bytes | dict) -> dict[str, Any]:
    if isinstance(body, dict):
        return body
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as e:
        snippet = body[:200] if isinstance(body, (str, bytes)) else type(body).__name__
        logger.warning("Envelope: response is not JSON: %s. snippet: %r", e, snippet)
        raise EnvelopeError(EnvelopeFailure.MALFORMED_BODY, "Response body is not valid JSON") from e
    if not isinstance(data, dict):
        raise EnvelopeError(EnvelopeFailure.MALFORMED_BODY, "Response body is not a JSON object")
    return data


def extract_content(body: str | bytes | dict) -> str:
    """Return the generated text of the first choice. Raises EnvelopeError on any shape problem."""
    data = _decode(body)

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise EnvelopeError(EnvelopeFailure.NO_CHOICES, "No choices found in response")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise EnvelopeError(EnvelopeFailure.NO_MESSAGE, "No message found in response")

    content = message.get("content")
    if not isinstance(content, str) or not content.strip():
        raise EnvelopeError(EnvelopeFailure.EMPTY_CONTENT, "Empty content in response")

    finish = first.get("finish_reason")
    if finish == "length":
        # Truncated; the parser drops the incomplete last block.
        logger.warning("Envelope: generation stopped at max_tokens (finish_reason=length)")
    return content
