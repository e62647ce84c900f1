"""Unit tests for Chat Completions envelope extraction."""
import json

import pytest

from quizgen.exceptions import EnvelopeError, EnvelopeFailure
from quizgen.llm.envelope import extract_content


def _body(content="Q1. x?\nA. a\nAnswer: A", **choice_extra):
    choice = {"index": 0, "message": {"role": "assistant", "content": content}, **choice_extra}
    return json.dumps({"choices": [choice]})


def test_extracts_first_choice_content():
    assert extract_content(_body("hello")) == "hello"


def test_accepts_bytes_and_decoded_dict():
    assert extract_content(_body("hi").encode()) == "hi"
    assert extract_content({"choices": [{"message": {"content": "hi"}}]}) == "hi"


def test_only_first_choice_is_read():
    body = {"choices": [{"message": {"content": "first"}}, {"message": {"content": "second"}}]}
    assert extract_content(body) == "first"


def test_content_is_not_trimmed():
    assert extract_content(_body("  Q1. x  ")) == "  Q1. x  "


def test_truncated_generation_still_returns_content():
    assert extract_content(_body("Q1. partial", finish_reason="length")) == "Q1. partial"


@pytest.mark.parametrize("body", [
    {"choices": []},
    {"choices": None},
    {},
    {"choices": "nope"},
])
def test_no_choices(body):
    with pytest.raises(EnvelopeError) as exc:
        extract_content(body)
    assert exc.value.reason is EnvelopeFailure.NO_CHOICES


@pytest.mark.parametrize("choice", [{}, {"message": None}, {"message": "text"}, "not a dict"])
def test_no_message(choice):
    with pytest.raises(EnvelopeError) as exc:
        extract_content({"choices": [choice]})
    assert exc.value.reason is EnvelopeFailure.NO_MESSAGE


@pytest.mark.parametrize("content", ["", "   \n\t", None])
def test_empty_content(content):
    with pytest.raises(EnvelopeError) as exc:
        extract_content({"choices": [{"message": {"role": "assistant", "content": content}}]})
    assert exc.value.reason is EnvelopeFailure.EMPTY_CONTENT


@pytest.mark.parametrize("body", ["<html>Bad Gateway</html>", b"", "[1, 2]"])
def test_malformed_body(body):
    with pytest.raises(EnvelopeError) as exc:
        extract_content(body)
    assert exc.value.reason is EnvelopeFailure.MALFORMED_BODY


def test_envelope_error_not_retryable():
    err = EnvelopeError(EnvelopeFailure.NO_CHOICES)
    assert err.retryable is False
    assert "no_choices" in str(err)
