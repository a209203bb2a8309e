"""Error classification for backend failures.

The check never retries, but a failed call is logged with its
category so a user can tell a bad API key (client) from a flaky
network (transient) without reading a traceback.
"""

from __future__ import annotations

from enum import Enum

import httpx


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, connection errors
    SERVER = "server"  # 500, 502, 503
    TIMEOUT = "timeout"  # deadline exceeded
    CLIENT = "client"  # 400, 401, 403, bad endpoint
    UNKNOWN = "unknown"  # unclassified


def _status_code(error: Exception) -> int | None:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    status_code = getattr(error, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def classify_error(error: Exception) -> ErrorClass:
    """Classify a backend error.

    Checks httpx exception types and status codes first, falls back
    to string matching for untyped exceptions.
    """
    # 1. Structured status code (httpx responses, provider SDK errors)
    status_code = _status_code(error)
    if status_code is not None:
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    # 2. Transport-level failures
    if isinstance(error, (httpx.TimeoutException, TimeoutError)):
        return ErrorClass.TIMEOUT
    if isinstance(error, (httpx.ConnectError, httpx.NetworkError, ConnectionError)):
        return ErrorClass.TRANSIENT
    if isinstance(error, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ErrorClass.CLIENT

    # 3. Fall back to string matching
    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "connection" in msg:
        return ErrorClass.TRANSIENT

    return ErrorClass.UNKNOWN
