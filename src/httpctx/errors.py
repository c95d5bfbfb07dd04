"""Custom exceptions raised by the httpctx client."""

from __future__ import annotations

from typing import Any


class HttpCtxError(Exception):
    """Base error for all client failures."""

    def __init__(self, message: str, *, context: Any | None = None) -> None:
        super().__init__(message)
        self.context = context


class EmptyTargetError(HttpCtxError, ValueError):
    """Raised when a request is built without a target URL."""

    def __init__(self, message: str = "unable to construct a request from an empty url") -> None:
        super().__init__(message)


class EncodingError(HttpCtxError):
    """Raised when a payload cannot be serialized to JSON."""


class NetworkError(HttpCtxError):
    """Raised when the transport cannot complete the round trip."""


class CancelledError(HttpCtxError):
    """Raised when the cancellation signal fires before the request completes."""

    def __init__(self, message: str = "request cancelled", *, reason: str = "cancelled") -> None:
        super().__init__(message)
        self.reason = reason


class DeadlineExceededError(CancelledError):
    """Raised when the signal's deadline passes before the request completes."""

    def __init__(self, message: str = "deadline exceeded") -> None:
        super().__init__(message, reason="deadline_exceeded")


class DecodeError(HttpCtxError):
    """Raised when a response body cannot be decoded into the requested shape."""


class AuthenticationError(HttpCtxError):
    """Raised when an authorizer is missing credentials."""


class StatusError(HttpCtxError):
    """Captures the status code and payload of a non-2xx response."""

    def __init__(self, status_code: int, data: bytes) -> None:
        super().__init__(f"returned status code => {status_code}")
        self.status_code = status_code
        self.data = data

    def decode(self, into: Any = dict) -> Any:
        """Decode the captured body the same way a successful response would be."""
        from .decoder import decode

        return decode(self.data, into)


__all__ = [
    "AuthenticationError",
    "CancelledError",
    "DeadlineExceededError",
    "DecodeError",
    "EmptyTargetError",
    "EncodingError",
    "HttpCtxError",
    "NetworkError",
    "StatusError",
]
