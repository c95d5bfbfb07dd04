"""Authentication hooks applied to every request before it is sent.

An :data:`AuthFunc` receives the built request and returns the request to
send. Returning the same object after adjusting its headers is the usual
case, but a hook may also hand back an entirely new ``httpx.Request``.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Callable

import httpx

from .errors import AuthenticationError

AuthFunc = Callable[[httpx.Request], httpx.Request]


def bearer_token(token: str) -> AuthFunc:
    if not token:
        raise AuthenticationError("Bearer token is not configured")

    def authorize(request: httpx.Request) -> httpx.Request:
        request.headers["Authorization"] = f"Bearer {token}"
        return request

    return authorize


def basic_auth(username: str, password: str) -> AuthFunc:
    credentials = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")

    def authorize(request: httpx.Request) -> httpx.Request:
        request.headers["Authorization"] = f"Basic {credentials}"
        return request

    return authorize


def compute_signature(secret_key: str, message: bytes) -> str:
    if not secret_key:
        raise AuthenticationError("Secret key is not configured")

    secret = secret_key.encode("utf-8")
    return hmac.new(secret, message, hashlib.sha256).hexdigest()


def signing_message(request: httpx.Request) -> bytes:
    """``METHOD\\nURL\\nBODY``, the bytes covered by :func:`hmac_signature`."""
    head = f"{request.method}\n{request.url}\n".encode("utf-8")
    return head + request.read()


def hmac_signature(user_id: str, secret_key: str) -> AuthFunc:
    """Sign each request with HMAC-SHA256 into ``X-Auth-User``/``X-Auth-Signature``."""
    if not (user_id and secret_key):
        raise AuthenticationError("User ID and secret key are required for request signing")

    def authorize(request: httpx.Request) -> httpx.Request:
        signature = compute_signature(secret_key, signing_message(request))
        request.headers["X-Auth-User"] = user_id
        request.headers["X-Auth-Signature"] = signature
        return request

    return authorize


__all__ = [
    "AuthFunc",
    "basic_auth",
    "bearer_token",
    "compute_signature",
    "hmac_signature",
    "signing_message",
]
