"""Races one transport round trip against a cancellation signal.

Each call to :meth:`Executor.execute` creates its own transport, starts one
worker thread running ``transport.perform`` and waits on a queue that both the
worker and the signal post to. Whichever posts first decides the outcome.

When the signal wins, the transport is aborted and the worker is still awaited
before ``execute`` raises, so no thread or response outlives the call.
"""

from __future__ import annotations

import queue
import threading
from typing import NamedTuple

import httpx

from .cancellation import Signal
from .logger import BoundLogger, create_logger
from .transport.base import Transport, TransportFactory


class _Completion(NamedTuple):
    response: httpx.Response | None
    error: BaseException | None


_CANCELLED = object()


class Executor:
    def __init__(self, transport_factory: TransportFactory, *, logger: BoundLogger | None = None) -> None:
        self._transport_factory = transport_factory
        self._logger = (logger or create_logger()).child("executor")

    def execute(self, signal: Signal, request: httpx.Request) -> httpx.Response:
        error = signal.error()
        if error is not None:
            raise error

        self._logger.debug("%s %s", request.method, request.url)

        transport = self._transport_factory()
        events: queue.Queue[object] = queue.Queue(maxsize=2)

        def on_signal(_: Signal) -> None:
            events.put(_CANCELLED)

        worker = threading.Thread(
            target=_perform,
            args=(transport, request, events),
            name=f"httpctx-{request.method.lower()}",
            daemon=True,
        )
        worker.start()
        signal.add_done_callback(on_signal)

        first = events.get()
        if isinstance(first, _Completion):
            signal.remove_done_callback(on_signal)
            worker.join()
            if first.error is not None:
                raise first.error
            assert first.response is not None
            return first.response

        self._logger.debug("Cancelling %s %s (%s)", request.method, request.url, signal.reason)
        try:
            transport.abort(request)
            transport.close_idle()
        finally:
            completion = events.get()
            while not isinstance(completion, _Completion):
                completion = events.get()
            worker.join()
            if completion.response is not None:
                completion.response.close()

        error = signal.error()
        assert error is not None
        raise error


def _perform(transport: Transport, request: httpx.Request, events: queue.Queue[object]) -> None:
    try:
        response = transport.perform(request)
    except BaseException as exc:  # delivered to the waiting caller
        events.put(_Completion(None, exc))
        return
    events.put(_Completion(response, None))


__all__ = ["Executor"]
