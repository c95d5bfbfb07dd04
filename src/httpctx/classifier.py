"""Status classification and body draining for completed responses."""

from __future__ import annotations

import httpx

from .errors import NetworkError, StatusError

REDIRECT_STATUS = 302


def is_success(status: int) -> bool:
    return 200 <= status < 300


def is_redirect(status: int) -> bool:
    return status == REDIRECT_STATUS


def classify(response: httpx.Response) -> tuple[bool, bool]:
    """Return ``(is_redirect, is_success)`` for ``response``."""
    status = response.status_code
    return is_redirect(status), is_success(status)


def drain(response: httpx.Response) -> bytes:
    """Read the whole body and release the response, whatever happens."""
    try:
        return response.read()
    except httpx.HTTPError as exc:
        raise NetworkError(f"Failed reading response body: {exc}") from exc
    finally:
        response.close()


def build_status_error(status: int, raw_body: bytes) -> StatusError:
    return StatusError(status, raw_body)


__all__ = [
    "REDIRECT_STATUS",
    "build_status_error",
    "classify",
    "drain",
    "is_redirect",
    "is_success",
]
