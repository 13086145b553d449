"""Prepared statements whose outcome is an affected-rows descriptor."""

from typing import TYPE_CHECKING

from sqlbind.builder import Query
from sqlbind.statement import PreparedStatementBase

if TYPE_CHECKING:
    from sqlbind.protocols import AsyncExecutorProtocol
    from sqlbind.result import ExecuteResult

__all__ = ("PreparedQuery",)


class PreparedQuery(PreparedStatementBase[Query]):
    """Named-parameter statement for ``INSERT``/``UPDATE``/``DELETE`` and DDL.

    Example:
        .. code-block:: python

            def binder(q: Query, key: str) -> Query:
                if key == ":id":
                    return q.bind(user_id)
                if key == ":name":
                    return q.bind(name)
                return q

            query = PreparedQuery("INSERT INTO users (id, name) VALUES (:id, :name)", binder)
            result = await query.execute(driver)
            result.rows_affected
    """

    __slots__ = ()

    def _new_query(self) -> Query:
        return Query(self._sql)

    async def execute(self, executor: "AsyncExecutorProtocol") -> "ExecuteResult":
        """Bind and run the statement once.

        Args:
            executor: Connection, pool or transaction driver to run against.

        Raises:
            ParameterStyleMismatchError: The executor expects another marker family.
            UnboundPlaceholderError: An occurrence was left unbound under strict binding.
            EngineError: The engine failed.

        Returns:
            The affected-rows descriptor.
        """
        query = self._prepare(executor, "execute")
        return await query.execute(executor)
