"""
Application configuration from environment variables.
Loads .env from the backend directory so the Hugging Face key is found regardless of cwd.
"""
import os
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Chat Completions endpoint of the Hugging Face inference router (OpenAI-compatible).
_DEFAULT_API_URL = "https://router.huggingface.co/v1/chat/completions"

# .env next to backend/ (parent of quizgen/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)
else:
    # Fallback: backend/.env relative to cwd (e.g. when running from repo root)
    _cwd_env = Path(os.getcwd()) / "backend" / ".env"
    if _cwd_env.exists():
        from dotenv import load_dotenv
        load_dotenv(_cwd_env, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hugging Face router. Without a key the mock transport is used.
    huggingface_api_key: str = ""
    # The one place the model is chosen. Required when the real transport is used.
    huggingface_model_id: str = ""
    huggingface_api_url: str = _DEFAULT_API_URL
    # Per-request timeout; a timeout surfaces as UpstreamTimeoutError.
    huggingface_timeout_seconds: float = 60.0
    # Attempts for 429/502/503 before giving up (1 disables retries).
    huggingface_max_attempts: int = 3

    # Questions per generation when the caller does not say.
    mcq_default_count: int = 10
    # Blocks longer than this are dropped before regex extraction.
    mcq_max_block_chars: int = 4000

    debug: bool = False

    @field_validator("huggingface_api_key", "huggingface_model_id", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("huggingface_api_url", mode="before")
    @classmethod
    def _resolve_api_url(cls, v):
        s = v.strip() if isinstance(v, str) else ""
        return s or _DEFAULT_API_URL

    @field_validator("huggingface_max_attempts", "mcq_default_count", "mcq_max_block_chars")
    @classmethod
    def _at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v


settings = Settings()
