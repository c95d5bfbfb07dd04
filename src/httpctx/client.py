"""High-level client: build, authorize, execute, classify and decode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from .auth import AuthFunc
from .cancellation import Signal, background, with_timeout
from .classifier import build_status_error, classify, drain
from .decoder import decode
from .executor import Executor
from .logger import LogLevel, create_logger
from .request import QueryParams, build_request
from .transport import TransportFactory, default_transport_factory

DEFAULT_USER_AGENT = "httpctx-python:0.1"


@dataclass
class ClientOptions:
    user_agent: str = DEFAULT_USER_AGENT
    auth: AuthFunc | None = None
    transport_factory: TransportFactory | None = None
    timeout: float | None = None
    logger: object | None = None
    log_level: LogLevel = "info"


class Client:
    """JSON-over-HTTP client whose every call can be cancelled through a :class:`Signal`."""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        auth: AuthFunc | None = None,
        transport_factory: TransportFactory | None = None,
        timeout: float | None = None,
        logger: object | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        options = ClientOptions(
            user_agent=user_agent,
            auth=auth,
            transport_factory=transport_factory,
            timeout=timeout,
            logger=logger,
            log_level=log_level,
        )
        self.user_agent = options.user_agent
        self.timeout = options.timeout
        self._auth = options.auth
        self._logger = create_logger(logger=options.logger, level=options.log_level)
        factory = options.transport_factory or default_transport_factory(logger=self._logger)
        self._executor = Executor(factory, logger=self._logger)

    @classmethod
    def from_options(cls, options: ClientOptions) -> "Client":
        return cls(
            user_agent=options.user_agent,
            auth=options.auth,
            transport_factory=options.transport_factory,
            timeout=options.timeout,
            logger=options.logger,
            log_level=options.log_level,
        )

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
        """Send one request and decode its body into ``into``.

        A 302 response is followed by re-entering this method as a GET against
        the ``Location`` header. There is no hop limit, so a redirect cycle
        recurses until Python raises ``RecursionError``. A client ``timeout`` covers
        the whole redirect chain, not each hop.

        Raises:
            EmptyTargetError: ``target`` is empty; nothing is sent.
            EncodingError: ``payload`` is not JSON serializable.
            CancelledError: ``signal`` fired first (``DeadlineExceededError`` on timeout).
            StatusError: the server answered outside 2xx.
            DecodeError: the body does not fit ``into``.
        """
        if self.timeout is None:
            return self._send(signal or background(), method, target, params, payload, into)

        scoped = with_timeout(self.timeout, signal)
        try:
            return self._send(scoped, method, target, params, payload, into)
        finally:
            scoped.cancel()

    def _send(
        self,
        signal: Signal,
        method: str,
        target: str,
        params: QueryParams | None,
        payload: Any,
        into: Any,
    ) -> Any:
        request = build_request(self.user_agent, method, target, params, payload)

        if self._auth is not None:
            request = self._auth(request)

        response = self._executor.execute(signal, request)

        is_redirect, ok = classify(response)
        if is_redirect:
            location = self._redirect_location(request, response)
            response.close()
            self._logger.debug("Following redirect %s -> %s", request.url, location)
            # Hops share the caller's signal, and with it any client timeout
            return self.get(signal, location, None, into)

        data = drain(response)
        self._logger.trace("%s %s status=%d bytes=%d", request.method, request.url, response.status_code, len(data))
        if not ok:
            raise build_status_error(response.status_code, data)
        return decode(data, into)

    def _redirect_location(self, request: httpx.Request, response: httpx.Response) -> str:
        location = response.headers.get("Location", "")
        if not location:
            return ""
        return str(request.url.join(location))


def new_client() -> Client:
    """A client without authentication."""
    return with_auth_func(None)


def with_auth_func(auth: AuthFunc | None) -> Client:
    return Client(auth=auth)


__all__ = ["Client", "ClientOptions", "DEFAULT_USER_AGENT", "new_client", "with_auth_func"]
