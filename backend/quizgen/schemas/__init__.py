from quizgen.schemas.question import (
    ChatMessage,
    CompletionRequest,
    GenerationSpec,
    ParsedQuestion,
    SamplingParams,
)

__all__ = ["ChatMessage", "CompletionRequest", "GenerationSpec", "ParsedQuestion", "SamplingParams"]
