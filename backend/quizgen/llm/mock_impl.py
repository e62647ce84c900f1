"""
Mock transport: returns placeholder MCQ text when HUGGINGFACE_API_KEY is not set.
Responses use the real envelope and Q/A layout so the whole pipeline runs locally.
"""
import hashlib
import json
import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_NUM_QUESTIONS = 5
MAX_MOCK_QUESTIONS = 25

# Topic is greedy so "Java with Spring" survives; the last " with " before the difficulty wins.
_COUNT_RE = re.compile(r"Generate (\d+) multiple choice questions on (.+) with (.*?) difficulty level\.")


def _make_mock_text(topic: str, num_questions: int, seed: str) -> str:
    """Deterministic placeholder questions in the layout the prompt asks for."""
    blocks = []
    for i in range(num_questions):
        answer = "ABCD"[i % 4]
        blocks.append(
            f"Q{i + 1}. [Mock] Question {i + 1} on {topic} (seed {seed}): which option is correct?\n"
            f"A. Option A (mock)\n"
            f"B. Option B (mock)\n"
            f"C. Option C (mock)\n"
            f"D. Option D (mock)\n"
            f"Answer: {answer}"
        )
    return "\n\n".join(blocks)


class MockTransport:
    """Returns a Chat Completions envelope without network access."""

    def close(self) -> None:
        pass

    def __enter__(self) -> "MockTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send(self, body: bytes) -> str:
        payload = json.loads(body)
        user = next((m.get("content", "") for m in payload.get("messages", []) if m.get("role") == "user"), "")
        m = _COUNT_RE.search(user)
        n = int(m.group(1)) if m else DEFAULT_NUM_QUESTIONS
        n = max(1, min(MAX_MOCK_QUESTIONS, n))
        topic = m.group(2) if m else "the topic"
        seed = hashlib.sha256(user.encode()).hexdigest()[:8]
        content = _make_mock_text(topic, n, seed)
        logger.debug("Mock transport: %s questions for %r", n, topic)
        return json.dumps({
            "id": f"mock-{seed}",
            "object": "chat.completion",
            "model": payload.get("model") or "mock",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
        })


def get_mock_transport() -> MockTransport:
    return MockTransport()
