"""AIOSQLite executor.

Wraps an open :class:`aiosqlite.Connection`. Committing and rolling back stay
with the caller.
"""

import contextlib
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from sqlbind.driver import AsyncDriverAdapterBase, rows_as_dicts
from sqlbind.exceptions import EngineError, IntegrityError, OperationalError
from sqlbind.parameters import ParameterStyle
from sqlbind.result import ExecuteResult
from sqlbind.utils.module_loader import ensure_dependency

ensure_dependency("aiosqlite")

import aiosqlite  # noqa: E402

if TYPE_CHECKING:
    from types import TracebackType

__all__ = ("AiosqliteCursor", "AiosqliteDriver", "AiosqliteExceptionHandler")


class AiosqliteCursor:
    """Async context manager for AIOSQLite cursor management."""

    __slots__ = ("connection", "cursor")

    def __init__(self, connection: "aiosqlite.Connection") -> None:
        self.connection = connection
        self.cursor: Optional[aiosqlite.Cursor] = None

    async def __aenter__(self) -> "aiosqlite.Cursor":
        self.cursor = await self.connection.cursor()
        return self.cursor

    async def __aexit__(
        self,
        exc_type: "Optional[type[BaseException]]",
        exc_val: "Optional[BaseException]",
        exc_tb: "Optional[TracebackType]",
    ) -> None:
        if self.cursor is not None:
            with contextlib.suppress(aiosqlite.Error):
                await self.cursor.close()


class AiosqliteExceptionHandler:
    """Map AIOSQLite exceptions to engine errors."""

    __slots__ = ()

    async def __aenter__(self) -> None:
        return None

    async def __aexit__(
        self,
        exc_type: "Optional[type[BaseException]]",
        exc_val: "Optional[BaseException]",
        exc_tb: "Optional[TracebackType]",
    ) -> None:
        if exc_type is None or exc_val is None:
            return
        if issubclass(exc_type, aiosqlite.IntegrityError):
            msg = f"AIOSQLite integrity constraint violation: {exc_val}"
            raise IntegrityError(msg) from exc_val
        if issubclass(exc_type, aiosqlite.OperationalError):
            msg = f"AIOSQLite operational error: {exc_val}"
            raise OperationalError(msg) from exc_val
        if issubclass(exc_type, aiosqlite.Error):
            msg = f"AIOSQLite database error: {exc_val}"
            raise EngineError(msg) from exc_val


class AiosqliteDriver(AsyncDriverAdapterBase["aiosqlite.Connection"]):
    """Executor over an :class:`aiosqlite.Connection` using ``?`` markers."""

    __slots__ = ()

    parameter_style: ClassVar[ParameterStyle] = ParameterStyle.QMARK
    dialect: ClassVar[str] = "sqlite"

    def with_cursor(self) -> AiosqliteCursor:
        return AiosqliteCursor(self.connection)

    def handle_database_exceptions(self) -> AiosqliteExceptionHandler:
        return AiosqliteExceptionHandler()

    async def _execute_statement(self, sql: str, parameters: "Sequence[Any]") -> ExecuteResult:
        async with self.with_cursor() as cursor:
            await cursor.execute(sql, parameters)
            rowcount = cursor.rowcount
            last_id = cursor.lastrowid if rowcount and rowcount > 0 else None
            return ExecuteResult(rows_affected=rowcount, last_insert_id=last_id)

    async def _fetch_rows(
        self, sql: str, parameters: "Sequence[Any]", limit: "Optional[int]"
    ) -> "list[dict[str, Any]]":
        async with self.with_cursor() as cursor:
            await cursor.execute(sql, parameters)
            fetched = await (cursor.fetchall() if limit is None else cursor.fetchmany(limit))
            column_names = [desc[0] for desc in cursor.description or []]
            return rows_as_dicts(column_names, fetched)
