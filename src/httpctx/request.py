"""Construction of ready-to-send requests."""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence, Union

import httpx

from .errors import EmptyTargetError, EncodingError

METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})

JSON_CONTENT_TYPE = "application/json"

QueryParams = Union[httpx.QueryParams, Mapping[str, Any], Sequence[tuple[str, Any]]]


def to_json(payload: Any) -> bytes | None:
    if payload is None:
        return None
    try:
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Unable to encode payload as JSON: {exc}", context=payload) from exc


def build_request(
    user_agent: str,
    method: str,
    target: str,
    params: QueryParams | None = None,
    payload: Any = None,
) -> httpx.Request:
    """Build a JSON request for ``target``.

    ``params`` are merged into any query the target already carries, replacing
    keys of the same name. The default headers always win over anything a
    caller might want to set; authorizers run afterwards and may add more.
    """
    if target == "":
        raise EmptyTargetError()

    verb = method.upper()
    if verb not in METHODS:
        raise ValueError(f"Unsupported method: {method}")

    body = to_json(payload)

    url = httpx.URL(target)
    if params is not None:
        url = url.copy_merge_params(params)

    headers = {
        "User-Agent": user_agent,
        "Accept": JSON_CONTENT_TYPE,
    }
    if body is not None:
        headers["Content-Type"] = JSON_CONTENT_TYPE

    return httpx.Request(verb, url, headers=headers, content=body)


__all__ = ["JSON_CONTENT_TYPE", "METHODS", "QueryParams", "build_request", "to_json"]
