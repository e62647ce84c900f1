"""
Hugging Face router transport (OpenAI-compatible /v1/chat/completions) over httpx.
Uses HUGGINGFACE_API_KEY and HUGGINGFACE_API_URL. Retries 429/502/503 with tenacity;
401 and 504 are never retried here.
"""
import logging
import time

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from quizgen.config import settings
from quizgen.exceptions import TransportError, UnauthorizedError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

_RETRY_STATUS = frozenset({429, 502, 503})


def _is_retryable(exc: BaseException) -> bool:
    """Retry on 429 (rate limit), 502/503 (model loading or overloaded)."""
    return isinstance(exc, TransportError) and exc.status_code in _RETRY_STATUS


def _classify_status(response: httpx.Response) -> Exception:
    status = response.status_code
    snippet = response.text[:200] if response.text else ""
    if status == 401:
        return UnauthorizedError("API token has been exhausted or is invalid")
    if status == 504:
        return UpstreamTimeoutError("The model request timed out")
    kind = "client" if 400 <= status < 500 else "server"
    return TransportError(f"API {kind} error: HTTP {status} {snippet}".strip(), kind=kind, status_code=status)


class HuggingFaceTransport:
    """Chat Completions client. One send() is one logical call; retries stay inside it."""

    def __init__(
        self,
        api_key: str,
        api_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
        backoff_seconds: float = 1.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_url = api_url or settings.huggingface_api_url
        self._max_attempts = max_attempts or settings.huggingface_max_attempts
        self._backoff = backoff_seconds
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        # Only a client created here is closed by close(); an injected one belongs to the caller.
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                timeout=timeout if timeout is not None else settings.huggingface_timeout_seconds,
            )
        client.headers.update(headers)
        self._client = client

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HuggingFaceTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post_once(self, body: bytes) -> str:
        try:
            response = self._client.post(self._api_url, content=body)
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(f"The model request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to model endpoint failed: {e}", kind="network") from e
        if response.status_code != 200:
            raise _classify_status(response)
        return response.text

    def send(self, body: bytes) -> str:
        @retry(
            retry=retry_if_exception(_is_retryable),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff, max=8),
            reraise=True,
        )
        def _send():
            return self._post_once(body)

        t_start = time.perf_counter()
        logger.debug("Hugging Face request: url=%s, body_len=%s", self._api_url, len(body))
        text = _send()
        logger.info("Hugging Face chat completion %.2fs, response_len=%s", time.perf_counter() - t_start, len(text))
        return text


def get_transport() -> HuggingFaceTransport:
    """Transport built from settings. Caller must check that a key is configured."""
    key = settings.huggingface_api_key
    logger.info("Hugging Face API key is set (len=%s); using %s", len(key), settings.huggingface_api_url)
    return HuggingFaceTransport(api_key=key)
