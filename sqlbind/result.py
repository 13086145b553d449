"""Engine outcome for statements that do not return rows."""

from typing import Any, Optional

__all__ = ("ExecuteResult",)


class ExecuteResult:
    """Affected-rows descriptor returned by an executor.

    Args:
        rows_affected: Number of rows changed by the statement, ``-1`` when the engine does not report it.
        last_insert_id: Identifier generated by the last insert, if the engine reports one.
    """

    __slots__ = ("last_insert_id", "rows_affected")

    def __init__(self, rows_affected: int = 0, last_insert_id: Optional[Any] = None) -> None:
        self.rows_affected = rows_affected
        self.last_insert_id = last_insert_id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rows_affected={self.rows_affected!r}, last_insert_id={self.last_insert_id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExecuteResult):
            return False
        return self.rows_affected == other.rows_affected and self.last_insert_id == other.last_insert_id

    def __hash__(self) -> int:
        return hash((self.rows_affected, self.last_insert_id))
