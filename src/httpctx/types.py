"""Shared typing helpers."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .cancellation import Signal
from .request import QueryParams


@runtime_checkable
class HttpClient(Protocol):
    def get(
        self,
        signal: Signal | None,
        target: str,
        params: QueryParams | None = None,
        into: Any = None,
    ) -> Any: ...

    def post(self, signal: Signal | None, target: str, payload: Any = None, into: Any = None) -> Any: ...

    def put(self, signal: Signal | None, target: str, payload: Any = None, into: Any = None) -> Any: ...

    def delete(self, signal: Signal | None, target: str) -> Any: ...

    def do(
        self,
        signal: Signal | None,
        method: str,
        target: str,
        params: QueryParams | None = None,
        payload: Any = None,
        into: Any = None,
    ) -> Any: ...


__all__ = ["HttpClient", "QueryParams"]
