"""Shared doubles for unit tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from sqlbind import ExecuteResult, ParameterStyle, Query


class RecordingExecutor:
    """In-memory executor recording every dispatch."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        result: ExecuteResult | None = None,
        error: BaseException | None = None,
        parameter_style: ParameterStyle = ParameterStyle.QMARK,
    ) -> None:
        self.rows = rows or []
        self.result = result or ExecuteResult(rows_affected=1)
        self.error = error
        self.parameter_style = parameter_style
        self.calls: list[tuple[str, str, tuple[Any, ...], int | None]] = []

    async def execute(self, sql: str, parameters: Sequence[Any]) -> ExecuteResult:
        self.calls.append(("execute", sql, tuple(parameters), None))
        if self.error is not None:
            raise self.error
        return self.result

    async def fetch(self, sql: str, parameters: Sequence[Any], *, limit: int | None = None) -> list[dict[str, Any]]:
        self.calls.append(("fetch", sql, tuple(parameters), limit))
        if self.error is not None:
            raise self.error
        return list(self.rows if limit is None else self.rows[:limit])


class CountingBinder:
    """Binder backed by a mapping that counts its invocations."""

    def __init__(self, values: dict[str, Any]) -> None:
        self.values = values
        self.calls: list[str] = []
        self.builders: list[int] = []

    def __call__(self, query: Query, name: str) -> Query:
        self.calls.append(name)
        self.builders.append(id(query))
        if name in self.values:
            return query.bind(self.values[name])
        return query


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def make_executor() -> type[RecordingExecutor]:
    return RecordingExecutor


@pytest.fixture
def make_binder() -> type[CountingBinder]:
    return CountingBinder
