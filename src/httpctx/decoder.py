"""Decoding of raw response bodies into the caller's requested shape."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from .errors import DecodeError


def decode(raw: bytes, into: Any = None) -> Any:
    """Decode ``raw`` according to ``into``.

    ``None`` skips decoding, ``bytes`` and ``str`` hand back the raw payload
    (invalid UTF-8 becomes U+FFFD for ``str``). A dataclass type is built from
    a decoded JSON object. ``dict`` and ``list`` require a JSON value of that
    shape; anything else (``object``, ``typing.Any``...) returns it as-is.
    """
    if into is None:
        return None
    if into is bytes:
        return bytes(raw)
    if into is str:
        return raw.decode("utf-8", errors="replace")

    text = _decode_text(raw)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON response: {exc}", context=text) from exc

    if isinstance(into, type) and dataclasses.is_dataclass(into):
        return _build_dataclass(into, parsed)
    if into in (dict, list) and not isinstance(parsed, into):
        raise DecodeError(
            f"Expected a JSON {into.__name__}, got {type(parsed).__name__}",
            context=parsed,
        )
    return parsed


def _decode_text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Response body is not valid UTF-8: {exc}") from exc


def _build_dataclass(into: type, parsed: Any) -> Any:
    if not isinstance(parsed, dict):
        raise DecodeError(
            f"Expected a JSON object for {into.__name__}, got {type(parsed).__name__}",
            context=parsed,
        )
    names = {field.name for field in dataclasses.fields(into) if field.init}
    try:
        return into(**{key: value for key, value in parsed.items() if key in names})
    except TypeError as exc:
        raise DecodeError(f"Cannot build {into.__name__} from response: {exc}", context=parsed) from exc


__all__ = ["decode"]
