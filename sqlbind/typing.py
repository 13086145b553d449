from typing import TYPE_CHECKING, Any, Final

from typing_extensions import TypeAlias, TypeVar

from sqlbind.utils.module_loader import module_available

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlbind.builder import Query

__all__ = (
    "AIOSQLITE_INSTALLED",
    "ASYNCMY_INSTALLED",
    "ASYNCPG_INSTALLED",
    "ATTRS_INSTALLED",
    "MSGSPEC_INSTALLED",
    "PYDANTIC_INSTALLED",
    "Binder",
    "DictRow",
    "ModelDTOT",
)

AIOSQLITE_INSTALLED: Final[bool] = module_available("aiosqlite")
ASYNCMY_INSTALLED: Final[bool] = module_available("asyncmy")
ASYNCPG_INSTALLED: Final[bool] = module_available("asyncpg")
ATTRS_INSTALLED: Final[bool] = module_available("attrs")
MSGSPEC_INSTALLED: Final[bool] = module_available("msgspec")
PYDANTIC_INSTALLED: Final[bool] = module_available("pydantic")

DictRow: TypeAlias = "dict[str, Any]"
"""Row mapping returned by executors, keyed by column name."""

ModelDTOT = TypeVar("ModelDTOT", default=Any)
"""Type variable for decoded result rows.

:class:`~sqlbind.protocols.FromRow` types, dataclasses, msgspec structs,
pydantic models, attrs classes, ``tuple`` or ``dict``.
"""

Binder: TypeAlias = "Callable[[Query, str], Query]"
"""Callable receiving the in-progress builder and one placeholder name, returning the builder."""
