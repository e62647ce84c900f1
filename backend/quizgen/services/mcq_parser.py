"""
MCQ parser: recover structured questions from free-form model text.

Input is whatever the model returned for the layout promised by services.prompt_builder
(Q<n>. / A.-D. / Answer: <Letter>). Each block is parsed independently; a block that
cannot be parsed is dropped and never fails the batch. parse_questions() never raises.
"""
import logging
import re

from pydantic import ValidationError

from quizgen.schemas.question import QUESTION_TYPE_MCQ, ParsedQuestion

logger = logging.getLogger(__name__)

# Upper bound on one block's length before any extraction regex runs on it.
MAX_BLOCK_CHARS = 4000

_BLOCK_SPLIT_RE = re.compile(r"Q\d+\.")
# An option marker is a letter with whitespace (or start of text) before it and whitespace
# (or end of text) after its dot, so "U.S.A." and "Washington D.C." are not markers.
_MARKER = r"(?<!\S)[A-D]\.(?=\s|\Z)"
_QUESTION_RE = re.compile(r"\AQ\d+\.(.*?)(?=(?<!\S)A\.(?:\s|\Z))", re.DOTALL)
_OPTION_RE = re.compile(r"(?<!\S)([A-D])\.(?=\s|\Z)(.*?)(?=" + _MARKER + r"|Answer:|\Z)", re.DOTALL)
_ANSWER_RE = re.compile(r"Answer:\s*([A-D])(?![A-Za-z])")


def split_blocks(raw_text: str | None) -> list[str]:
    """
    Split on Q<digits>. and renumber. Text before the first marker is discarded;
    the i-th block (1-based) is rebuilt as "Q<i>." + fragment whatever ordinal the model wrote.
    """
    if not raw_text:
        return []
    fragments = _BLOCK_SPLIT_RE.split(raw_text)
    return [f"Q{i}.{frag}" for i, frag in enumerate(fragments[1:], start=1)]


def _extract_options(region: str) -> list[str]:
    # Every match is kept in order; a repeated letter appends again rather than replacing.
    return [m.group(2).strip() for m in _OPTION_RE.finditer(region)]


def parse_block(
    block: str,
    topic: str,
    difficulty: str,
    max_block_chars: int = MAX_BLOCK_CHARS,
) -> ParsedQuestion | None:
    """Parse one Q<n>. block. Returns None when question text or answer label is missing."""
    if len(block) > max_block_chars:
        logger.debug("MCQ parse: block of %s chars exceeds %s; dropped", len(block), max_block_chars)
        return None

    q_match = _QUESTION_RE.match(block)
    if not q_match:
        return None
    question_text = q_match.group(1).strip()
    if not question_text:
        return None

    answer = _ANSWER_RE.search(block)
    if not answer:
        return None

    options_start = q_match.end()
    options_end = answer.start() if answer.start() >= options_start else len(block)
    options = _extract_options(block[options_start:options_end])

    try:
        return ParsedQuestion(
            question_text=question_text,
            options=options,
            correct_option=answer.group(1),
            topic=topic,
            difficulty=difficulty,
            type=QUESTION_TYPE_MCQ,
        )
    except ValidationError as e:
        logger.warning("MCQ parse: block rejected by schema: %s", e)
        return None


def parse_questions_with_stats(
    raw_text: str | None,
    topic: str,
    difficulty: str,
    max_block_chars: int = MAX_BLOCK_CHARS,
) -> tuple[list[ParsedQuestion], int]:
    """Return (questions in block order, number of blocks dropped)."""
    if not raw_text or not raw_text.strip():
        return [], 0
    blocks = split_blocks(raw_text)
    parsed = [parse_block(b, topic, difficulty, max_block_chars=max_block_chars) for b in blocks]
    questions = [q for q in parsed if q is not None]
    dropped = len(blocks) - len(questions)
    if dropped:
        logger.info("MCQ parse: %s of %s blocks unparseable; dropped", dropped, len(blocks))
    return questions, dropped


def parse_questions(
    raw_text: str | None,
    topic: str,
    difficulty: str,
    max_block_chars: int = MAX_BLOCK_CHARS,
) -> list[ParsedQuestion]:
    """
    Parse model text into questions, preserving block order. No deduplication and no
    minimum count: fewer questions than requested is a normal outcome.
    """
    questions, _ = parse_questions_with_stats(raw_text, topic, difficulty, max_block_chars=max_block_chars)
    return questions
