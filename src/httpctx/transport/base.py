"""Common transport abstractions."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Performs one prepared request; created fresh for every request attempt."""

    def perform(self, request: httpx.Request) -> httpx.Response: ...

    def abort(self, request: httpx.Request) -> None: ...

    def close_idle(self) -> None: ...


TransportFactory = Callable[[], Transport]


__all__ = ["Transport", "TransportFactory"]
