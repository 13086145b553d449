"""Asyncmy (MySQL/MariaDB) executors.

:class:`AsyncmyDriver` runs on one connection the caller controls, typically
inside an open transaction. :class:`AsyncmyPoolDriver` acquires a connection
per call and commits writes before releasing it.

asyncmy interpolates ``%s`` markers client side, so a literal ``%`` in the
template must be written as ``%%``.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from sqlbind.driver import AsyncDriverAdapterBase, rows_as_dicts
from sqlbind.exceptions import EngineError, IntegrityError, OperationalError
from sqlbind.parameters import ParameterStyle
from sqlbind.result import ExecuteResult
from sqlbind.utils.module_loader import ensure_dependency

ensure_dependency("asyncmy")

import asyncmy.errors  # noqa: E402  # pyright: ignore

if TYPE_CHECKING:
    from types import TracebackType

    from asyncmy import Connection
    from asyncmy.pool import Pool

__all__ = ("AsyncmyDriver", "AsyncmyExceptionHandler", "AsyncmyPoolDriver")


class AsyncmyExceptionHandler:
    """Map asyncmy exceptions to engine errors."""

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
        if issubclass(exc_type, asyncmy.errors.IntegrityError):
            msg = f"AsyncMy MySQL integrity constraint violation: {exc_val}"
            raise IntegrityError(msg) from exc_val
        if issubclass(exc_type, asyncmy.errors.OperationalError):
            msg = f"AsyncMy MySQL operational error: {exc_val}"
            raise OperationalError(msg) from exc_val
        if issubclass(exc_type, asyncmy.errors.MySQLError):
            msg = f"AsyncMy MySQL database error: {exc_val}"
            raise EngineError(msg) from exc_val


async def _execute_on(connection: "Connection", sql: str, parameters: "Sequence[Any]") -> ExecuteResult:
    async with connection.cursor() as cursor:
        await cursor.execute(sql, parameters or None)
        affected_rows = cursor.rowcount if cursor.rowcount is not None else -1
        last_id = getattr(cursor, "lastrowid", None) if cursor.rowcount and cursor.rowcount > 0 else None
        return ExecuteResult(rows_affected=affected_rows, last_insert_id=last_id)


async def _fetch_on(
    connection: "Connection", sql: str, parameters: "Sequence[Any]", limit: "Optional[int]"
) -> "list[dict[str, Any]]":
    async with connection.cursor() as cursor:
        await cursor.execute(sql, parameters or None)
        fetched = await (cursor.fetchall() if limit is None else cursor.fetchmany(limit))
        column_names = [desc[0] for desc in cursor.description or []]
        return rows_as_dicts(column_names, fetched or [])


class AsyncmyDriver(AsyncDriverAdapterBase["Connection"]):
    """Executor over one asyncmy connection using ``%s`` markers."""

    __slots__ = ()

    parameter_style: ClassVar[ParameterStyle] = ParameterStyle.POSITIONAL_PYFORMAT
    dialect: ClassVar[str] = "mysql"

    def handle_database_exceptions(self) -> AsyncmyExceptionHandler:
        return AsyncmyExceptionHandler()

    async def _execute_statement(self, sql: str, parameters: "Sequence[Any]") -> ExecuteResult:
        return await _execute_on(self.connection, sql, parameters)

    async def _fetch_rows(
        self, sql: str, parameters: "Sequence[Any]", limit: "Optional[int]"
    ) -> "list[dict[str, Any]]":
        return await _fetch_on(self.connection, sql, parameters, limit)


class AsyncmyPoolDriver(AsyncDriverAdapterBase["Pool"]):
    """Executor over an asyncmy pool; each call runs on its own connection."""

    __slots__ = ()

    parameter_style: ClassVar[ParameterStyle] = ParameterStyle.POSITIONAL_PYFORMAT
    dialect: ClassVar[str] = "mysql"

    def handle_database_exceptions(self) -> AsyncmyExceptionHandler:
        return AsyncmyExceptionHandler()

    async def _execute_statement(self, sql: str, parameters: "Sequence[Any]") -> ExecuteResult:
        async with self.connection.acquire() as connection:
            result = await _execute_on(connection, sql, parameters)
            await connection.commit()
            return result

    async def _fetch_rows(
        self, sql: str, parameters: "Sequence[Any]", limit: "Optional[int]"
    ) -> "list[dict[str, Any]]":
        async with self.connection.acquire() as connection:
            return await _fetch_on(connection, sql, parameters, limit)
