"""AsyncPG (PostgreSQL) executor.

Works with an :class:`asyncpg.Connection` (including one inside
``connection.transaction()``) or an :class:`asyncpg.Pool`. Row-limited fetches
read through a server-side cursor so only the requested rows leave the server.
"""

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Final, Optional, Union

from sqlbind.driver import AsyncDriverAdapterBase
from sqlbind.exceptions import EngineError, IntegrityError, OperationalError
from sqlbind.parameters import ParameterStyle
from sqlbind.result import ExecuteResult
from sqlbind.utils.module_loader import ensure_dependency

ensure_dependency("asyncpg")

import asyncpg  # noqa: E402

if TYPE_CHECKING:
    from types import TracebackType

__all__ = ("ASYNC_PG_STATUS_REGEX", "AsyncpgDriver", "AsyncpgExceptionHandler", "parse_status")

ASYNC_PG_STATUS_REGEX: Final["re.Pattern[str]"] = re.compile(r"^([A-Z]+)(?:\s+(\d+))?\s+(\d+)$", re.IGNORECASE)
EXPECTED_REGEX_GROUPS: Final[int] = 3


def parse_status(status: str) -> int:
    """Parse an AsyncPG command status to extract the row count.

    Args:
        status: Status string like "INSERT 0 1", "UPDATE 3", "DELETE 2"

    Returns:
        Number of affected rows, or 0 if it cannot be parsed
    """
    if not status:
        return 0

    match = ASYNC_PG_STATUS_REGEX.match(status.strip())
    if match:
        groups = match.groups()
        if len(groups) >= EXPECTED_REGEX_GROUPS:
            try:
                return int(groups[-1])
            except (ValueError, IndexError):
                pass

    return 0


class AsyncpgExceptionHandler:
    """Map asyncpg exceptions to engine errors."""

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
        if issubclass(exc_type, asyncpg.exceptions.IntegrityConstraintViolationError):
            code = getattr(exc_val, "sqlstate", None)
            msg = f"PostgreSQL integrity constraint violation [{code}]: {exc_val}"
            raise IntegrityError(msg) from exc_val
        if issubclass(exc_type, asyncpg.exceptions.PostgresConnectionError):
            msg = f"PostgreSQL connection error: {exc_val}"
            raise OperationalError(msg) from exc_val
        if issubclass(exc_type, (asyncpg.exceptions.PostgresError, asyncpg.exceptions.InterfaceError)):
            msg = f"AsyncPG database error: {exc_val}"
            raise EngineError(msg) from exc_val


async def _fetch_limited(
    connection: "asyncpg.Connection[Any]", sql: str, parameters: "Sequence[Any]", limit: int
) -> "list[Any]":
    """Read at most ``limit`` records through a server-side cursor.

    Cursors only exist inside a transaction; within a caller's transaction
    this opens a savepoint.
    """
    async with connection.transaction():
        cursor = await connection.cursor(sql, *parameters)
        return list(await cursor.fetch(limit))


class AsyncpgDriver(AsyncDriverAdapterBase[Union["asyncpg.Connection[Any]", "asyncpg.Pool[Any]"]]):
    """Executor over an asyncpg connection or pool using ``$1`` markers."""

    __slots__ = ()

    parameter_style: ClassVar[ParameterStyle] = ParameterStyle.NUMERIC
    dialect: ClassVar[str] = "postgres"

    def handle_database_exceptions(self) -> AsyncpgExceptionHandler:
        return AsyncpgExceptionHandler()

    async def _execute_statement(self, sql: str, parameters: "Sequence[Any]") -> ExecuteResult:
        status = await self.connection.execute(sql, *parameters)
        return ExecuteResult(rows_affected=parse_status(status) if isinstance(status, str) else 0)

    async def _fetch_rows(
        self, sql: str, parameters: "Sequence[Any]", limit: "Optional[int]"
    ) -> "list[dict[str, Any]]":
        if limit is None:
            records = await self.connection.fetch(sql, *parameters)
        elif isinstance(self.connection, asyncpg.Pool):
            async with self.connection.acquire() as connection:
                records = await _fetch_limited(connection, sql, parameters, limit)
        else:
            records = await _fetch_limited(self.connection, sql, parameters, limit)
        return [dict(record) for record in records]
