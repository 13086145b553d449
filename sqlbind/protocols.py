"""Capabilities consumed by prepared statements.

The executor is the seam to the engine and the connection/transaction layer.
Anything satisfying :class:`AsyncExecutorProtocol` can run a prepared
statement; the bundled adapters in :mod:`sqlbind.adapters` are one option.
"""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlbind.parameters import ParameterStyle
    from sqlbind.result import ExecuteResult

__all__ = ("AsyncExecutorProtocol", "FromRow")


@runtime_checkable
class AsyncExecutorProtocol(Protocol):
    """Runs fully bound positional SQL.

    ``parameter_style`` names the marker family the engine understands.
    """

    parameter_style: "ParameterStyle"

    async def execute(self, sql: str, parameters: "Sequence[Any]") -> "ExecuteResult":
        """Run ``sql`` discarding rows and report the affected-rows outcome."""
        ...

    async def fetch(
        self, sql: str, parameters: "Sequence[Any]", *, limit: "Optional[int]" = None
    ) -> "list[dict[str, Any]]":
        """Run ``sql`` and return rows as column-keyed mappings.

        When ``limit`` is given, at most that many rows are returned.
        """
        ...


@runtime_checkable
class FromRow(Protocol):
    """Result type that knows how to build itself from one engine row."""

    @classmethod
    def from_row(cls, row: "Mapping[str, Any]") -> "Self":
        """Construct an instance from a column-keyed row."""
        ...
