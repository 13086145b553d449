"""Prepared statements whose rows are decoded into a result type."""

from typing import TYPE_CHECKING, Optional

from sqlbind.builder import QueryAs
from sqlbind.statement import PreparedStatementBase
from sqlbind.typing import ModelDTOT

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlbind.config import BindConfig
    from sqlbind.parameters import ParameterStyle
    from sqlbind.protocols import AsyncExecutorProtocol

__all__ = ("PreparedQueryAs",)


class PreparedQueryAs(PreparedStatementBase[QueryAs[ModelDTOT]]):
    """Named-parameter statement returning rows decoded into ``schema_type``.

    ``schema_type`` may implement :class:`~sqlbind.protocols.FromRow`, or be a
    dataclass, ``NamedTuple``, msgspec ``Struct``, pydantic model, attrs class,
    ``tuple`` or ``dict``. Without one, rows are returned as ``dict``.

    Example:
        .. code-block:: python

            query = PreparedQueryAs(
                "SELECT id, name, email FROM users WHERE age >= :min_age",
                lambda q, key: q.bind(min_age) if key == ":min_age" else q,
                schema_type=User,
            )
            users = await query.fetch_all(driver)
    """

    __slots__ = ("_schema_type",)

    def __init__(
        self,
        template: str,
        binder: "Callable[[QueryAs[ModelDTOT], str], QueryAs[ModelDTOT]]",
        *,
        schema_type: "Optional[type[ModelDTOT]]" = None,
        parameter_style: "Optional[ParameterStyle | str]" = None,
        config: "Optional[BindConfig]" = None,
    ) -> None:
        super().__init__(template, binder, parameter_style=parameter_style, config=config)
        self._schema_type = schema_type

    @property
    def schema_type(self) -> "Optional[type[ModelDTOT]]":
        return self._schema_type

    def _new_query(self) -> "QueryAs[ModelDTOT]":
        return QueryAs(self._sql, self._schema_type)

    async def fetch_all(self, executor: "AsyncExecutorProtocol") -> "list[ModelDTOT]":
        """Return every row in the engine's order; no rows gives ``[]``.

        Raises:
            EngineError: The engine failed or a row could not be decoded.
        """
        query = self._prepare(executor, "fetch_all")
        return await query.fetch_all(executor)

    async def fetch_one(self, executor: "AsyncExecutorProtocol") -> "ModelDTOT":
        """Return exactly one row.

        Raises:
            NotFoundError: No rows were returned.
            MultipleResultsFoundError: More than one row was returned.
            EngineError: The engine failed or the row could not be decoded.
        """
        query = self._prepare(executor, "fetch_one")
        return await query.fetch_one(executor)

    async def fetch_optional(self, executor: "AsyncExecutorProtocol") -> "Optional[ModelDTOT]":
        """Return the row, or ``None`` when the query produced none.

        Raises:
            MultipleResultsFoundError: More than one row was returned.
            EngineError: The engine failed or the row could not be decoded.
        """
        query = self._prepare(executor, "fetch_optional")
        return await query.fetch_optional(executor)
