"""
MCQ generation: prompt -> one Chat Completions call -> envelope -> parser.
Call-level failures surface as quizgen.exceptions (UnauthorizedError, UpstreamTimeoutError,
TransportError, EnvelopeError, SerializationError) with request context attached.
An empty question list is a valid result, not an error.
"""
import json
import logging
import time

from quizgen import metrics
from quizgen.config import settings
from quizgen.exceptions import GenerationError, SerializationError
from quizgen.llm import get_transport
from quizgen.llm.base import ChatCompletionTransport
from quizgen.llm.envelope import extract_content
from quizgen.schemas.question import GenerationSpec, ParsedQuestion
from quizgen.services.mcq_parser import MAX_BLOCK_CHARS, parse_questions_with_stats
from quizgen.services.prompt_builder import build_completion_request

logger = logging.getLogger(__name__)

# Model id reported when the mock transport runs without HUGGINGFACE_MODEL_ID.
MOCK_MODEL_ID = "mock"


def _encode_request(spec: GenerationSpec, model_id: str) -> bytes:
    try:
        request = build_completion_request(spec, model_id)
        return json.dumps(request.to_payload(), ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not encode generation request: {e}") from e


class QuestionGenerator:
    """Stateless apart from its collaborators; safe to share across threads if the transport is."""

    def __init__(
        self,
        transport: ChatCompletionTransport,
        model_id: str,
        max_block_chars: int = MAX_BLOCK_CHARS,
    ) -> None:
        if not model_id or not model_id.strip():
            raise ValueError("model_id must be a non-empty string")
        self._transport = transport
        self._model_id = model_id.strip()
        self._max_block_chars = max_block_chars

    @property
    def model_id(self) -> str:
        return self._model_id

    def generate(self, spec: GenerationSpec) -> list[ParsedQuestion]:
        context = {
            "topic": spec.topic,
            "difficulty": spec.difficulty,
            "count": spec.count,
            "model": self._model_id,
        }
        logger.info(
            "Generating MCQs: topic=%s, difficulty=%s, count=%s, model=%s",
            spec.topic,
            spec.difficulty,
            spec.count,
            self._model_id,
        )
        t_start = time.perf_counter()
        try:
            body = _encode_request(spec, self._model_id)
            raw = self._transport.send(body)
            content = extract_content(raw)
        except GenerationError as e:
            e.context.update(context)
            logger.error("MCQ generation failed (%s): %s", type(e).__name__, e)
            raise
        except Exception as e:
            logger.exception("Unexpected error during MCQ generation: %s", e)
            raise

        questions, dropped = parse_questions_with_stats(
            content,
            spec.topic,
            spec.difficulty,
            max_block_chars=self._max_block_chars,
        )
        metrics.record_parse_result(len(questions), dropped)
        if len(questions) < spec.count:
            logger.warning("Under-generated: %s/%s questions (dropped blocks=%s)", len(questions), spec.count, dropped)
        logger.info(
            "MCQ generation done in %.2fs: parsed=%s, dropped=%s",
            time.perf_counter() - t_start,
            len(questions),
            dropped,
        )
        return questions


def get_question_generator(transport: ChatCompletionTransport | None = None) -> QuestionGenerator:
    """
    Generator wired from settings. With a real API key HUGGINGFACE_MODEL_ID is required;
    there is no built-in default model.
    """
    model_id = settings.huggingface_model_id
    if not model_id:
        if settings.huggingface_api_key:
            raise ValueError("HUGGINGFACE_MODEL_ID must be set when HUGGINGFACE_API_KEY is configured")
        model_id = MOCK_MODEL_ID
    return QuestionGenerator(
        transport or get_transport(),
        model_id,
        max_block_chars=settings.mcq_max_block_chars,
    )


def generate_questions(topic: str, difficulty: str, count: int | None = None) -> list[ParsedQuestion]:
    """
    Generate one batch without persisting it. count defaults to MCQ_DEFAULT_COUNT (10).
    The transport opened for this call is closed before returning.
    """
    spec = GenerationSpec(
        topic=topic,
        difficulty=difficulty,
        count=count if count is not None else settings.mcq_default_count,
    )
    with get_transport() as transport:
        return get_question_generator(transport).generate(spec)
