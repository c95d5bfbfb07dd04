import logging
from typing import Iterator

import pytest

from httpctx.logger import TRACE_LEVEL, BoundLogger, create_logger


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def captured() -> Iterator[tuple[logging.Logger, ListHandler]]:
    logger = logging.getLogger("httpctx-tests")
    logger.setLevel(TRACE_LEVEL)
    logger.propagate = False
    handler = ListHandler()
    logger.addHandler(handler)
    yield logger, handler
    logger.removeHandler(handler)


class DuckLogger:
    """Has trace/debug methods but no generic log()."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def trace(self, msg: str, *args: object) -> None:
        self.lines.append(("trace", msg % args))

    def debug(self, msg: str, *args: object) -> None:
        self.lines.append(("debug", msg % args))


def test_default_level_is_silent(captured) -> None:
    logger, handler = captured
    bound = BoundLogger(logger)
    bound.trace("hidden")
    bound.debug("hidden")
    assert handler.records == []


def test_debug_level_filters_trace(captured) -> None:
    logger, handler = captured
    bound = BoundLogger(logger, level="debug")
    bound.trace("hidden")
    bound.debug("GET %s", "http://example.com")
    assert [record.getMessage() for record in handler.records] == ["GET http://example.com"]
    assert handler.records[0].levelno == logging.DEBUG


def test_trace_level_emits_everything(captured) -> None:
    logger, handler = captured
    bound = BoundLogger(logger, level="trace")
    bound.trace("status=%d", 200)
    bound.debug("done")
    assert [record.levelname for record in handler.records] == ["TRACE", "DEBUG"]


def test_child_uses_nested_logger_name(captured) -> None:
    logger, handler = captured
    bound = BoundLogger(logger, level="debug").child("executor")
    bound.debug("hello")
    assert handler.records[0].name == "httpctx-tests.executor"


def test_duck_typed_logger_receives_messages() -> None:
    duck = DuckLogger()
    bound = BoundLogger(duck, level="trace").child("transport")
    bound.trace("a=%d", 1)
    bound.debug("b")
    assert duck.lines == [("trace", "a=1"), ("debug", "b")]


def test_broken_logger_never_raises() -> None:
    class Exploding:
        def log(self, *args: object, **kwargs: object) -> None:
            raise RuntimeError("disk full")

    BoundLogger(Exploding(), level="trace").debug("still fine")


def test_create_logger_keeps_bound_logger() -> None:
    bound = BoundLogger(DuckLogger())
    assert create_logger(logger=bound) is bound
    assert isinstance(create_logger(logger=DuckLogger(), level="debug"), BoundLogger)
