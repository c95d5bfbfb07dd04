"""HTTP transport built on top of httpx."""

from __future__ import annotations

import socket
import threading
from typing import Any

import httpx

from ..errors import NetworkError
from ..logger import BoundLogger, create_logger
from .base import TransportFactory

DEFAULT_TIMEOUT = httpx.Timeout(60.0)

# Every request gets a fresh connection.
NO_KEEPALIVE = httpx.Limits(max_keepalive_connections=0)


class HttpxTransport:
    """Sends a single request over a private ``httpx.Client``.

    The network streams httpcore opens for the request are collected through
    the ``trace`` request extension. ``abort`` shuts their sockets down, which
    wakes a ``perform`` blocked on the server so it fails with a
    ``NetworkError``, and then closes the client. A stream that connects after
    ``abort`` is shut down as soon as it is reported.
    """

    def __init__(
        self,
        *,
        timeout: httpx.Timeout | float | None = None,
        transport: httpx.BaseTransport | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
        self._client = httpx.Client(
            timeout=self._timeout,
            limits=NO_KEEPALIVE,
            follow_redirects=False,
            transport=transport,
        )
        self._lock = threading.Lock()
        self._streams: list[Any] = []
        self._aborted = False
        self._logger = (logger or create_logger()).child("transport")

    def perform(self, request: httpx.Request) -> httpx.Response:
        try:
            self._logger.debug("HTTP %s %s", request.method, request.url)
            response = self._client.send(self._prepare(request), stream=True)
            self._logger.debug(
                "HTTP <- %s status=%s",
                request.url,
                response.status_code,
            )
            return response
        except httpx.TimeoutException as exc:
            raise NetworkError(f"HTTP request timeout for {request.url}: {exc}") from exc
        except httpx.TransportError as exc:
            if self._aborted:
                raise NetworkError(f"Request to {request.url} was aborted") from exc
            raise NetworkError(f"Cannot connect to {request.url}: {exc}") from exc
        except RuntimeError as exc:
            # httpx refuses to send on a client closed by abort()
            if self._aborted:
                raise NetworkError(f"Request to {request.url} was aborted") from exc
            raise

    def _prepare(self, request: httpx.Request) -> httpx.Request:
        # A copy carrying the timeout and trace hook; the caller's request stays untouched.
        extensions = dict(request.extensions)
        extensions.setdefault("timeout", httpx.Timeout(self._timeout).as_dict())
        extensions["trace"] = self._tracer(extensions.get("trace"))
        return httpx.Request(
            request.method,
            request.url,
            headers=request.headers,
            stream=request.stream,
            extensions=extensions,
        )

    def _tracer(self, downstream: Any):
        def trace(event_name: str, info: dict[str, Any]) -> None:
            stream = info.get("return_value")
            if event_name.endswith(".complete") and hasattr(stream, "get_extra_info"):
                self._track(stream)
            if downstream is not None:
                downstream(event_name, info)

        return trace

    def _track(self, stream: Any) -> None:
        with self._lock:
            self._streams.append(stream)
            aborted = self._aborted
        if aborted:
            # Connected after abort() already ran
            _shutdown(stream)

    def abort(self, request: httpx.Request) -> None:
        self._logger.debug("HTTP abort %s %s", request.method, request.url)
        with self._lock:
            self._aborted = True
            streams = list(self._streams)
        for stream in streams:
            _shutdown(stream)
        self._client.close()

    def close_idle(self) -> None:
        self._client.close()


def _shutdown(stream: Any) -> None:
    sock = stream.get_extra_info("socket")
    if sock is None:
        return
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        # Already closed, or detached by a TLS wrap
        pass


def default_transport_factory(
    *,
    timeout: httpx.Timeout | float | None = None,
    logger: BoundLogger | None = None,
) -> TransportFactory:
    """Build a factory producing one :class:`HttpxTransport` per request."""

    def factory() -> HttpxTransport:
        return HttpxTransport(timeout=timeout, logger=logger)

    return factory


__all__ = ["DEFAULT_TIMEOUT", "HttpxTransport", "default_transport_factory"]
