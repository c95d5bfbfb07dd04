"""Test doubles: a fake transport for the executor and a canned-response client."""

from __future__ import annotations

import json
import threading
from typing import Any, Iterator, Mapping

import httpx

from .cancellation import Signal
from .decoder import decode
from .errors import NetworkError
from .request import QueryParams

DEFAULT_BODY = json.dumps({"hello": "world"}).encode("utf-8")


class TrackedStream(httpx.SyncByteStream):
    """Response body that remembers how many times it was read and closed."""

    def __init__(self, body: bytes) -> None:
        self._body = body
        self.reads = 0
        self.closes = 0

    def __iter__(self) -> Iterator[bytes]:
        self.reads += 1
        yield self._body

    def close(self) -> None:
        self.closes += 1

    @property
    def closed(self) -> bool:
        return self.closes > 0


class FakeTransport:
    """Simulates a network round trip that takes ``delay`` seconds.

    ``hang=True`` blocks until :meth:`abort`. An aborted round trip raises
    ``NetworkError``; otherwise ``error`` is raised if set, else a response
    with ``status`` and ``body`` is returned.
    """

    def __init__(
        self,
        status: int = 200,
        body: bytes | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        error: BaseException | None = None,
        delay: float = 0.0,
        hang: bool = False,
    ) -> None:
        self.status = status
        self.body = DEFAULT_BODY if body is None else body
        self.headers = dict(headers or {})
        self.error = error
        self.delay = delay
        self.hang = hang
        self.requests: list[httpx.Request] = []
        self.streams: list[TrackedStream] = []
        self.abort_calls = 0
        self.close_idle_calls = 0
        self.finished = threading.Event()
        self._aborted = threading.Event()

    def perform(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        try:
            self._aborted.wait(None if self.hang else self.delay)
            if self._aborted.is_set():
                raise NetworkError(f"Request to {request.url} was aborted")
            if self.error is not None:
                raise self.error
            stream = TrackedStream(self.body)
            self.streams.append(stream)
            return httpx.Response(self.status, headers=self.headers, stream=stream, request=request)
        finally:
            self.finished.set()

    def abort(self, request: httpx.Request) -> None:
        self.abort_calls += 1
        self._aborted.set()

    def close_idle(self) -> None:
        self.close_idle_calls += 1


class FakeTransportFactory:
    """Hands out a new :class:`FakeTransport` per request and keeps them for inspection."""

    def __init__(self, **settings: Any) -> None:
        self.settings = settings
        self.transports: list[FakeTransport] = []

    def __call__(self) -> FakeTransport:
        transport = FakeTransport(**self.settings)
        self.transports.append(transport)
        return transport


class MockClient:
    """Stands in for :class:`~httpctx.client.Client` in callers' tests.

    A non-empty ``body`` is decoded into ``into``; afterwards ``err`` is raised
    if set. Nothing touches the network.
    """

    def __init__(self, err: BaseException | None = None, body: str = "") -> None:
        self.err = err
        self.body = body
        self.calls: list[tuple[str, str]] = []

    def get(
        self,
        signal: Signal | None,
        target: str,
        params: QueryParams | None = None,
        into: Any = None,
    ) -> Any:
        return self.do(signal, "GET", target, params, None, into)

    def post(self, signal: Signal | None, target: str, payload: Any = None, into: Any = None) -> Any:
        return self.do(signal, "POST", target, None, payload, into)

    def put(self, signal: Signal | None, target: str, payload: Any = None, into: Any = None) -> Any:
        return self.do(signal, "PUT", target, None, payload, into)

    def delete(self, signal: Signal | None, target: str) -> Any:
        return self.do(signal, "DELETE", target, None, None, None)

    def do(
        self,
        signal: Signal | None,
        method: str,
        target: str,
        params: QueryParams | None = None,
        payload: Any = None,
        into: Any = None,
    ) -> Any:
        self.calls.append((method, target))
        value = None
        if self.body:
            value = decode(self.body.encode("utf-8"), into)
        if self.err is not None:
            raise self.err
        return value


__all__ = ["DEFAULT_BODY", "FakeTransport", "FakeTransportFactory", "MockClient", "TrackedStream"]
