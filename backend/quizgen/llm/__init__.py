"""
Transport selection: Hugging Face router when HUGGINGFACE_API_KEY is set, mock otherwise.
"""
import logging

from quizgen.config import settings
from quizgen.llm.base import ChatCompletionTransport

logger = logging.getLogger(__name__)


def get_transport() -> ChatCompletionTransport:
    """Return the Hugging Face transport; mock only if the API key is missing."""
    if not settings.huggingface_api_key:
        logger.warning("HUGGINGFACE_API_KEY not set; using mock transport.")
        from quizgen.llm.mock_impl import get_mock_transport
        return get_mock_transport()
    from quizgen.llm.huggingface_impl import get_transport as _get_hf
    return _get_hf()


__all__ = ["ChatCompletionTransport", "get_transport"]
