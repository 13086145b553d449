"""Tests for sqlbind.utils.logging."""

import io
import logging
import sys
from collections.abc import Generator
from typing import Any

import pytest

from sqlbind import BindConfig, PreparedQuery
from sqlbind._serialization import decode_json
from sqlbind.utils.logging import StatementFormatter, configure_logging, get_logger


@pytest.fixture
def restore_sqlbind_logger() -> Generator[logging.Logger, None, None]:
    logger = logging.getLogger("sqlbind")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="sqlbind.statement",
        level=logging.DEBUG,
        pathname=__file__,
        lineno=10,
        msg="Dispatching %s",
        args=("execute",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_get_logger_namespace() -> None:
    assert get_logger().name == "sqlbind"
    assert get_logger("sqlbind").name == "sqlbind"
    assert get_logger("statement").name == "sqlbind.statement"
    assert get_logger("sqlbind.driver").name == "sqlbind.driver"
    assert get_logger("sqlbindings").name == "sqlbind.sqlbindings"


def test_structured_output_merges_extra_fields() -> None:
    record = _record(extra_fields={"operation": "execute", "parameter_count": 2, "sql": "SELECT ?, ?"})
    entry = decode_json(StatementFormatter().format(record))

    assert entry["level"] == "DEBUG"
    assert entry["logger"] == "sqlbind.statement"
    assert entry["message"] == "Dispatching execute"
    assert entry["operation"] == "execute"
    assert entry["parameter_count"] == 2
    assert entry["sql"] == "SELECT ?, ?"


def test_structured_output_without_extra_fields() -> None:
    entry = decode_json(StatementFormatter().format(_record()))
    assert set(entry) == {"timestamp", "level", "logger", "message"}


def test_structured_output_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    entry = decode_json(StatementFormatter().format(record))
    assert "ValueError: boom" in entry["exception"]


def test_plain_output_appends_fields() -> None:
    line = StatementFormatter(structured=False).format(_record(extra_fields={"operation": "execute"}))
    assert line.endswith("sqlbind.statement: Dispatching execute operation='execute'")


def test_plain_output_without_fields() -> None:
    line = StatementFormatter(structured=False).format(_record())
    assert line.endswith("DEBUG sqlbind.statement: Dispatching execute")


def test_configure_logging_replaces_its_handler(restore_sqlbind_logger: logging.Logger) -> None:
    configure_logging("debug", stream=io.StringIO())
    logger = configure_logging("debug", stream=io.StringIO())

    assert logger is restore_sqlbind_logger
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert sum(isinstance(h.formatter, StatementFormatter) for h in logger.handlers) == 1


@pytest.mark.asyncio
async def test_dispatch_records_reach_configured_stream(restore_sqlbind_logger: logging.Logger, executor: Any) -> None:
    stream = io.StringIO()
    configure_logging(logging.DEBUG, stream=stream)
    query = PreparedQuery("SELECT :a, :b", lambda q, key: q.bind("secret"), config=BindConfig(log_statements=True))

    await query.execute(executor)

    entries = [decode_json(line) for line in stream.getvalue().splitlines()]
    dispatch = next(entry for entry in entries if entry["logger"] == "sqlbind.statement")
    assert dispatch["operation"] == "execute"
    assert dispatch["parameter_count"] == 2
    assert dispatch["sql"] == "SELECT ?, ?"
    assert "secret" not in stream.getvalue()


@pytest.mark.asyncio
async def test_info_level_hides_dispatch_records(restore_sqlbind_logger: logging.Logger, executor: Any) -> None:
    stream = io.StringIO()
    configure_logging("INFO", structured=False, stream=stream)

    await PreparedQuery("SELECT :a", lambda q, key: q.bind(1)).execute(executor)

    assert stream.getvalue() == ""
