"""
Unit tests for the Hugging Face transport: status classification, timeouts, retries.
HTTP is simulated with httpx.MockTransport; no network access.
"""
import json

import httpx
import pytest

from quizgen.exceptions import TransportError, UnauthorizedError, UpstreamTimeoutError
from quizgen.llm.huggingface_impl import HuggingFaceTransport

API_URL = "https://router.example.test/v1/chat/completions"
OK_BODY = json.dumps({"choices": [{"message": {"role": "assistant", "content": "Q1. x?\nA. a\nAnswer: A"}}]})


def _transport(handler, max_attempts=1):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HuggingFaceTransport(
        api_key="hf_test_key",
        api_url=API_URL,
        max_attempts=max_attempts,
        backoff_seconds=0,
        client=client,
    )


def test_success_returns_body_and_sends_auth_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["content_type"] = request.headers.get("Content-Type")
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, text=OK_BODY)

    out = _transport(handler).send(json.dumps({"model": "m", "messages": []}).encode())
    assert out == OK_BODY
    assert seen["auth"] == "Bearer hf_test_key"
    assert seen["content_type"] == "application/json"
    assert seen["url"] == API_URL
    assert seen["body"] == {"model": "m", "messages": []}


def test_401_maps_to_unauthorized():
    t = _transport(lambda request: httpx.Response(401, text="Invalid credentials"))
    with pytest.raises(UnauthorizedError) as exc:
        t.send(b"{}")
    assert exc.value.retryable is False
    assert "hf_test_key" not in str(exc.value)


def test_504_maps_to_timeout():
    t = _transport(lambda request: httpx.Response(504, text="Gateway Timeout"))
    with pytest.raises(UpstreamTimeoutError) as exc:
        t.send(b"{}")
    assert exc.value.retryable is True


def test_client_side_timeout_maps_to_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamTimeoutError):
        _transport(handler).send(b"{}")


def test_connect_error_maps_to_network_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc:
        _transport(handler).send(b"{}")
    assert exc.value.kind == "network"
    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


@pytest.mark.parametrize("status,kind", [(400, "client"), (404, "client"), (500, "server"), (503, "server")])
def test_other_statuses_map_to_transport_error(status, kind):
    t = _transport(lambda request: httpx.Response(status, text="nope"))
    with pytest.raises(TransportError) as exc:
        t.send(b"{}")
    assert exc.value.kind == kind
    assert exc.value.status_code == status


def test_retries_503_then_succeeds():
    calls = {"n": 0}

    def handler(request):
        calls["n"] += 1
        if calls["n"] < 3:
            return httpx.Response(503, text="Model is loading")
        return httpx.Response(200, text=OK_BODY)

    assert _transport(handler, max_attempts=3).send(b"{}") == OK_BODY
    assert calls["n"] == 3


def test_retry_gives_up_after_max_attempts():
    calls = {"n": 0}

    def handler(request):
        calls["n"] += 1
        return httpx.Response(429, text="Too Many Requests")

    with pytest.raises(TransportError) as exc:
        _transport(handler, max_attempts=2).send(b"{}")
    assert exc.value.status_code == 429
    assert calls["n"] == 2


@pytest.mark.parametrize("status", [401, 504, 400])
def test_non_retryable_statuses_called_once(status):
    calls = {"n": 0}

    def handler(request):
        calls["n"] += 1
        return httpx.Response(status)

    with pytest.raises((UnauthorizedError, UpstreamTimeoutError, TransportError)):
        _transport(handler, max_attempts=3).send(b"{}")
    assert calls["n"] == 1
