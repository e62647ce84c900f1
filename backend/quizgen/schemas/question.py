"""
Generation request and parsed question schemas.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

OPTION_LABELS = ("A", "B", "C", "D")
QUESTION_TYPE_MCQ = "MCQ"


def label_to_index(label: str | None) -> int | None:
    """A -> 0, B -> 1, ... ; None for anything that is not a single option letter."""
    lbl = (label or "").strip().upper()
    if len(lbl) != 1 or not ("A" <= lbl <= "Z"):
        return None
    return ord(lbl) - ord("A")


class GenerationSpec(BaseModel):
    topic: str
    difficulty: str  # easy | medium | hard, but any display string is echoed verbatim
    count: int = 10

    @field_validator("topic", "difficulty")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be a non-empty string")
        return v

    @field_validator("count", mode="before")
    @classmethod
    def count_positive(cls, v):
        if isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise ValueError("count must be a positive integer")
        return v

    model_config = ConfigDict(frozen=True)


class ChatMessage(BaseModel):
    role: Literal["system", "user"]
    content: str

    model_config = ConfigDict(frozen=True)


class SamplingParams(BaseModel):
    temperature: float
    top_p: float
    max_tokens: int

    model_config = ConfigDict(frozen=True)


class CompletionRequest(BaseModel):
    """Body for POST /v1/chat/completions."""
    model: str
    messages: list[ChatMessage]
    temperature: float
    top_p: float
    max_tokens: int

    def to_payload(self) -> dict:
        return self.model_dump(mode="json")


class ParsedQuestion(BaseModel):
    """One MCQ recovered from model text. Built by the MCQ parser only."""
    question_text: str
    options: list[str]  # option text in order of appearance; usually 4, may be fewer
    correct_option: str | None  # "A".."D"
    topic: str
    difficulty: str
    type: str = QUESTION_TYPE_MCQ

    @field_validator("question_text")
    @classmethod
    def question_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("question_text must not be empty")
        return v

    @field_validator("correct_option")
    @classmethod
    def correct_option_one_of(cls, v: str | None) -> str | None:
        if v is not None and v not in OPTION_LABELS:
            raise ValueError("correct_option must be A, B, C, or D")
        return v

    model_config = ConfigDict(frozen=True)

    @property
    def correct_option_text(self) -> str | None:
        """Option text the label points at, or None if the option list is too short."""
        idx = label_to_index(self.correct_option)
        if idx is None or idx >= len(self.options):
            return None
        return self.options[idx]

    def labeled_options(self) -> dict[str, str]:
        """{"A": text, "B": text, ...} by position."""
        return {chr(ord("A") + i): text for i, text in enumerate(self.options)}

    def is_correct(self, selected: str | None) -> bool:
        """Grade a submitted answer label against the stored correct label."""
        if self.correct_option is None:
            return False
        return (selected or "").strip().upper() == self.correct_option
