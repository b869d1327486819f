from __future__ import annotations

import io
import json
import logging
from typing import Iterator

import pytest

from tinyoutcome.utils.logging import LOGGER_NAME, JsonFormatter, setup_logging


@pytest.fixture
def restore_pkg_logger() -> Iterator[None]:
    pkg = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(pkg.handlers), pkg.level, pkg.propagate
    yield
    pkg.handlers[:] = handlers
    pkg.setLevel(level)
    pkg.propagate = propagate


def test_json_formatter_merges_extra() -> None:
    record = logging.LogRecord("tinyoutcome.test", logging.INFO, __file__, 1, "pushed %d", (3,), None)
    record.signal = "heuristic"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "tinyoutcome.test"
    assert payload["message"] == "pushed 3"
    assert payload["signal"] == "heuristic"
    assert "lineno" not in payload


def test_setup_logging_writes_json_lines(restore_pkg_logger: None) -> None:
    stream = io.StringIO()
    pkg = setup_logging("debug", stream=stream)
    assert pkg.name == "tinyoutcome"
    logging.getLogger("tinyoutcome.test").debug("hello", extra={"samples": 2**70})
    payload = json.loads(stream.getvalue().strip())
    assert payload["message"] == "hello"
    assert payload["samples"] == 2**70
    assert pkg.level == logging.DEBUG


def test_setup_logging_leaves_root_alone(restore_pkg_logger: None) -> None:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    stream = io.StringIO()
    setup_logging("info", stream=stream)
    assert root.handlers == handlers
    assert root.level == level
    logging.getLogger("elsewhere").warning("not ours")
    assert stream.getvalue() == ""
