"""Async executor base.

Adapters wrap a caller-owned connection, pool or transaction handle and
implement :class:`~sqlbind.protocols.AsyncExecutorProtocol` on top of it.
Connection lifecycle and transactions stay with the caller.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Optional

from typing_extensions import TypeVar

from sqlbind.utils.logging import get_logger

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from sqlbind.parameters import ParameterStyle
    from sqlbind.result import ExecuteResult

__all__ = ("AsyncDriverAdapterBase", "rows_as_dicts")

logger = get_logger("driver")

ConnectionT = TypeVar("ConnectionT")


def rows_as_dicts(column_names: "Sequence[str]", rows: "Iterable[Any]") -> "list[dict[str, Any]]":
    """Key positional rows by column name; mapping rows are copied as is."""
    return [dict(row) if isinstance(row, dict) else dict(zip(column_names, row)) for row in rows]


class AsyncDriverAdapterBase(ABC, Generic[ConnectionT]):
    """Base class for async executors.

    Subclasses declare the marker family their engine understands and map
    driver exceptions to :class:`~sqlbind.exceptions.EngineError` subclasses.

    Args:
        connection: Connection, pool or transaction handle owned by the caller.
    """

    __slots__ = ("connection",)

    parameter_style: "ClassVar[ParameterStyle]"
    dialect: ClassVar[str]

    def __init__(self, connection: ConnectionT) -> None:
        self.connection = connection

    def __repr__(self) -> str:
        return f"{type(self).__name__}(connection={self.connection!r})"

    @abstractmethod
    def handle_database_exceptions(self) -> "AbstractAsyncContextManager[None]":
        """Context manager mapping driver exceptions to engine errors."""

    @abstractmethod
    async def _execute_statement(self, sql: str, parameters: "Sequence[Any]") -> "ExecuteResult":
        """Run ``sql`` and report the affected-rows outcome."""

    @abstractmethod
    async def _fetch_rows(
        self, sql: str, parameters: "Sequence[Any]", limit: "Optional[int]"
    ) -> "list[dict[str, Any]]":
        """Run ``sql`` and return at most ``limit`` rows (all rows when ``None``)."""

    async def execute(self, sql: str, parameters: "Sequence[Any]") -> "ExecuteResult":
        async with self.handle_database_exceptions():
            result = await self._execute_statement(sql, parameters)
        logger.debug(
            "%s execute affected %d row(s)",
            self.dialect,
            result.rows_affected,
            extra={"extra_fields": {"dialect": self.dialect, "rows_affected": result.rows_affected}},
        )
        return result

    async def fetch(
        self, sql: str, parameters: "Sequence[Any]", *, limit: "Optional[int]" = None
    ) -> "list[dict[str, Any]]":
        async with self.handle_database_exceptions():
            rows = await self._fetch_rows(sql, parameters, limit)
        logger.debug(
            "%s fetch returned %d row(s)",
            self.dialect,
            len(rows),
            extra={"extra_fields": {"dialect": self.dialect, "row_count": len(rows), "limit": limit}},
        )
        return rows
