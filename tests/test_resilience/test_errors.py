"""Tests for backend error classification."""

from __future__ import annotations

import httpx

from llmcheck.resilience.errors import ErrorClass, classify_error


class _StatusCodeError(Exception):
    """Exception with a status_code attribute."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


# ── status codes ─────────────────────────────────────────────


def test_classify_httpx_429_as_transient() -> None:
    assert classify_error(_status_error(429)) == ErrorClass.TRANSIENT


def test_classify_httpx_401_as_client() -> None:
    assert classify_error(_status_error(401)) == ErrorClass.CLIENT


def test_classify_httpx_503_as_server() -> None:
    assert classify_error(_status_error(503)) == ErrorClass.SERVER


def test_classify_status_code_attribute() -> None:
    """Untyped exceptions carrying status_code are classified too."""
    assert classify_error(_StatusCodeError("forbidden", 403)) == ErrorClass.CLIENT


# ── transport errors ─────────────────────────────────────────


def test_classify_httpx_timeout() -> None:
    assert classify_error(httpx.ReadTimeout("slow")) == ErrorClass.TIMEOUT


def test_classify_builtin_timeout() -> None:
    assert classify_error(TimeoutError()) == ErrorClass.TIMEOUT


def test_classify_connect_error_as_transient() -> None:
    assert classify_error(httpx.ConnectError("refused")) == ErrorClass.TRANSIENT


def test_classify_unsupported_protocol_as_client() -> None:
    err = httpx.UnsupportedProtocol("ftp is not supported")
    assert classify_error(err) == ErrorClass.CLIENT


# ── string fallback ──────────────────────────────────────────


def test_classify_string_fallback_rate_limit() -> None:
    err = Exception("rate limit exceeded for model xyz")
    assert classify_error(err) == ErrorClass.TRANSIENT


def test_classify_string_fallback_server() -> None:
    assert classify_error(Exception("upstream said 502")) == ErrorClass.SERVER


def test_classify_string_fallback_timeout() -> None:
    assert classify_error(Exception("request timed out")) == ErrorClass.TIMEOUT


def test_classify_unknown() -> None:
    assert classify_error(ValueError("bad json")) == ErrorClass.UNKNOWN
