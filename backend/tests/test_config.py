"""Unit tests for Settings: defaults, env loading, normalization."""
import pytest
from pydantic import ValidationError

from quizgen.config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "HUGGINGFACE_API_KEY",
        "HUGGINGFACE_MODEL_ID",
        "HUGGINGFACE_API_URL",
        "HUGGINGFACE_MAX_ATTEMPTS",
        "MCQ_DEFAULT_COUNT",
        "MCQ_MAX_BLOCK_CHARS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = Settings(_env_file=None)
    assert s.huggingface_api_url == "https://router.huggingface.co/v1/chat/completions"
    assert s.huggingface_model_id == ""
    assert s.mcq_default_count == 10
    assert s.huggingface_max_attempts == 3


def test_reads_env_and_strips(clean_env):
    clean_env.setenv("HUGGINGFACE_API_KEY", "  hf_abc  ")
    clean_env.setenv("HUGGINGFACE_MODEL_ID", " mistralai/Mistral-7B-Instruct-v0.3\n")
    s = Settings(_env_file=None)
    assert s.huggingface_api_key == "hf_abc"
    assert s.huggingface_model_id == "mistralai/Mistral-7B-Instruct-v0.3"


def test_blank_api_url_falls_back_to_default(clean_env):
    clean_env.setenv("HUGGINGFACE_API_URL", "   ")
    assert Settings(_env_file=None).huggingface_api_url.startswith("https://router.huggingface.co/")


def test_non_positive_counts_rejected(clean_env):
    clean_env.setenv("MCQ_DEFAULT_COUNT", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
