"""
Prompt builder: system + user messages for MCQ generation, and the sampling policy.
The user message fixes the text layout that services.mcq_parser expects:

    Q1. Question?
    A. Option1
    B. Option2
    C. Option3
    D. Option4
    Answer: B

The model does not always follow it, so the parser never trusts it.
"""
from quizgen.schemas.question import ChatMessage, CompletionRequest, GenerationSpec, SamplingParams

# Sampling policy, not computed. max_tokens leaves room for a full batch of 10.
TEMPERATURE = 0.7
TOP_P = 0.9
MAX_TOKENS = 2048

MCQ_GEN_SYSTEM = (
    "You are a technical quiz generator specialized in creating multiple-choice questions on technical topics. "
    "Create clear and precise questions that test understanding, not just memorization."
)

MCQ_USER_TEMPLATE = (
    "Generate {count} multiple choice questions on {topic} with {difficulty} difficulty level. Format:\n"
    "Q1. Question?\n"
    "A. Option1\n"
    "B. Option2\n"
    "C. Option3\n"
    "D. Option4\n"
    "Answer: [Correct Option]\n\n"
    "Questions should be technical, precise, and test understanding, not just memorization. "
    "Each question must have exactly one correct answer. "
    "Do not provide explanations. Only output in the format specified above."
)


def format_mcq_prompt(topic: str, difficulty: str, count: int) -> str:
    """User instruction; topic and difficulty are echoed verbatim."""
    return MCQ_USER_TEMPLATE.format(count=count, topic=topic, difficulty=difficulty)


def build_request(topic: str, difficulty: str, count: int) -> tuple[list[ChatMessage], SamplingParams]:
    """
    Return ([system, user], sampling params) for one generation call.
    Pure function of its inputs. Raises ValueError when count is not a positive integer.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(f"count must be a positive integer, got {count!r}")
    messages = [
        ChatMessage(role="system", content=MCQ_GEN_SYSTEM),
        ChatMessage(role="user", content=format_mcq_prompt(topic, difficulty, count)),
    ]
    return messages, SamplingParams(temperature=TEMPERATURE, top_p=TOP_P, max_tokens=MAX_TOKENS)


def build_completion_request(spec: GenerationSpec, model_id: str) -> CompletionRequest:
    """Full wire request. The model id comes from configuration, never from here."""
    messages, sampling = build_request(spec.topic, spec.difficulty, spec.count)
    return CompletionRequest(
        model=model_id,
        messages=messages,
        temperature=sampling.temperature,
        top_p=sampling.top_p,
        max_tokens=sampling.max_tokens,
    )
