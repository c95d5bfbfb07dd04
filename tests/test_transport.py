import socket
import threading
import time

import httpx
import pytest

from httpctx.cancellation import with_cancel
from httpctx.errors import CancelledError, NetworkError
from httpctx.executor import Executor
from httpctx.transport import HttpxTransport, Transport, default_transport_factory


def mocked(handler) -> HttpxTransport:
    return HttpxTransport(transport=httpx.MockTransport(handler))


def test_perform_sends_request_and_returns_streamed_response() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"ok": True})

    transport = mocked(handler)
    request = httpx.Request("POST", "http://example.com/items", content=b"{}")
    response = transport.perform(request)

    assert response.status_code == 201
    response.read()
    assert response.json() == {"ok": True}
    assert seen[0].url == request.url
    response.close()


def test_perform_maps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = mocked(handler)
    with pytest.raises(NetworkError) as excinfo:
        transport.perform(httpx.Request("GET", "http://example.com"))
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_perform_after_abort_raises_network_error() -> None:
    transport = mocked(lambda request: httpx.Response(200))
    request = httpx.Request("GET", "http://example.com")
    transport.abort(request)
    with pytest.raises(NetworkError):
        transport.perform(request)


def test_factory_builds_fresh_transports() -> None:
    factory = default_transport_factory(timeout=5.0)
    first, second = factory(), factory()
    assert first is not second
    assert isinstance(first, Transport)
    first.close_idle()
    second.close_idle()


@pytest.fixture
def silent_server():
    """A listening socket that accepts connections and never answers."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(8)
    host, port = server.getsockname()
    yield f"http://{host}:{port}/slow"
    server.close()


def test_abort_unblocks_perform_waiting_on_silent_server(silent_server: str) -> None:
    transport = HttpxTransport(timeout=5.0)
    request = httpx.Request("GET", silent_server)
    threading.Timer(0.05, transport.abort, args=(request,)).start()

    started = time.monotonic()
    with pytest.raises(NetworkError):
        transport.perform(request)
    assert time.monotonic() - started < 1.0


def test_cancelled_execute_returns_before_transport_timeout(silent_server: str) -> None:
    executor = Executor(default_transport_factory(timeout=5.0))
    signal = with_cancel()
    threading.Timer(0.05, signal.cancel).start()

    started = time.monotonic()
    with pytest.raises(CancelledError):
        executor.execute(signal, httpx.Request("GET", silent_server))
    assert time.monotonic() - started < 1.0
    assert [t for t in threading.enumerate() if t.name.startswith("httpctx-")] == []
