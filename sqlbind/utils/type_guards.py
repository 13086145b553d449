"""Type guard functions for result type dispatch.

Each guard inspects a *type* (not an instance) so row decoding can pick a
strategy before any row is seen.
"""

from typing import TYPE_CHECKING, Any

from sqlbind.typing import ATTRS_INSTALLED, MSGSPEC_INSTALLED, PYDANTIC_INSTALLED

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

    from sqlbind.protocols import FromRow

__all__ = (
    "is_attrs_schema",
    "is_dataclass",
    "is_from_row_type",
    "is_msgspec_struct",
    "is_named_tuple",
    "is_pydantic_model",
)


def is_from_row_type(obj: Any) -> "TypeGuard[type[FromRow]]":
    """Check if a type provides a ``from_row`` constructor.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, type) and callable(getattr(obj, "from_row", None))


def is_dataclass(obj: Any) -> bool:
    """Check if a value is a dataclass type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, type) and hasattr(obj, "__dataclass_fields__")


def is_named_tuple(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, tuple) and hasattr(obj, "_fields")


def is_msgspec_struct(obj: Any) -> bool:
    """Check if a value is a msgspec struct type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not MSGSPEC_INSTALLED or not isinstance(obj, type):
        return False
    from msgspec import Struct

    return issubclass(obj, Struct)


def is_pydantic_model(obj: Any) -> bool:
    """Check if a value is a pydantic model type.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not PYDANTIC_INSTALLED or not isinstance(obj, type):
        return False
    from pydantic import BaseModel

    return issubclass(obj, BaseModel)


def is_attrs_schema(obj: Any) -> bool:
    """Check if a value is an attrs class.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    if not ATTRS_INSTALLED or not isinstance(obj, type):
        return False
    import attrs

    return attrs.has(obj)
