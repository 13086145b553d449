"""Per-call query builders.

A builder refers to the positional SQL of the statement that created it and
accumulates bound values positionally. Builders live for one execution only;
prepared statements create a fresh one on every call and never keep it.
"""

from typing import TYPE_CHECKING, Any, Generic, Optional

from sqlbind.exceptions import MultipleResultsFoundError, NotFoundError, wrap_engine_errors
from sqlbind.typing import ModelDTOT
from sqlbind.utils.schema import decode_row, decode_rows

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlbind.protocols import AsyncExecutorProtocol
    from sqlbind.result import ExecuteResult

__all__ = ("Query", "QueryAs")


class Query:
    """Positional SQL plus the values bound to it so far.

    Args:
        sql: Positional SQL this builder dispatches.
    """

    __slots__ = ("_arguments", "_sql")

    def __init__(self, sql: str) -> None:
        self._sql = sql
        self._arguments: list[Any] = []

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def arguments(self) -> "tuple[Any, ...]":
        """Values bound so far, in marker order."""
        return tuple(self._arguments)

    def bind(self, value: Any) -> "Self":
        """Bind ``value`` to the next positional marker.

        Returns:
            The builder, so binders can ``return query.bind(value)``.
        """
        self._arguments.append(value)
        return self

    @property
    def bound_count(self) -> int:
        return len(self._arguments)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self._sql!r}, bound={len(self._arguments)})"

    async def execute(self, executor: "AsyncExecutorProtocol") -> "ExecuteResult":
        """Run the statement and return the affected-rows descriptor.

        Raises:
            EngineError: The executor failed.
        """
        with wrap_engine_errors("execute"):
            return await executor.execute(self._sql, self.arguments)


class QueryAs(Query, Generic[ModelDTOT]):
    """Builder whose rows are decoded into ``schema_type``.

    Args:
        sql: Positional SQL this builder dispatches.
        schema_type: Result type, ``None`` for plain ``dict`` rows.
    """

    __slots__ = ("_schema_type",)

    def __init__(self, sql: str, schema_type: "Optional[type[ModelDTOT]]" = None) -> None:
        super().__init__(sql)
        self._schema_type = schema_type

    @property
    def schema_type(self) -> "Optional[type[ModelDTOT]]":
        return self._schema_type

    async def _fetch(self, executor: "AsyncExecutorProtocol", limit: "Optional[int]" = None) -> "list[dict[str, Any]]":
        with wrap_engine_errors("fetch"):
            return await executor.fetch(self._sql, self.arguments, limit=limit)

    async def fetch_all(self, executor: "AsyncExecutorProtocol") -> "list[ModelDTOT]":
        """Return every row, decoded, in the engine's order."""
        rows = await self._fetch(executor)
        return decode_rows(rows, self._schema_type)

    async def fetch_one(self, executor: "AsyncExecutorProtocol") -> "ModelDTOT":
        """Return exactly one decoded row.

        Raises:
            NotFoundError: No rows were returned.
            MultipleResultsFoundError: More than one row was returned.
        """
        rows = await self._fetch(executor, limit=2)
        if not rows:
            msg = "no rows"
            raise NotFoundError(msg)
        if len(rows) > 1:
            msg = "too many rows"
            raise MultipleResultsFoundError(msg)
        return decode_row(rows[0], self._schema_type)

    async def fetch_optional(self, executor: "AsyncExecutorProtocol") -> "Optional[ModelDTOT]":
        """Return the decoded row, or ``None`` when there is none.

        Raises:
            MultipleResultsFoundError: More than one row was returned.
        """
        rows = await self._fetch(executor, limit=2)
        if not rows:
            return None
        if len(rows) > 1:
            msg = "too many rows"
            raise MultipleResultsFoundError(msg)
        return decode_row(rows[0], self._schema_type)
