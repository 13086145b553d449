"""Row decoding into result types."""

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Any, Optional, cast
from uuid import UUID

from sqlbind.exceptions import RowDecodeError
from sqlbind.utils.type_guards import (
    is_attrs_schema,
    is_dataclass,
    is_from_row_type,
    is_msgspec_struct,
    is_named_tuple,
    is_pydantic_model,
)

if TYPE_CHECKING:
    from pydantic import TypeAdapter

    from sqlbind.typing import ModelDTOT

__all__ = ("decode_row", "decode_rows")


def _default_msgspec_deserializer(target_type: Any, value: Any) -> Any:
    """Build path and UUID values msgspec does not coerce from engine types."""
    if isinstance(value, target_type):
        return value
    if isinstance(target_type, type) and issubclass(target_type, (Path, PurePath, UUID)):
        return target_type(value)
    return value


@lru_cache(typed=True)
def get_type_adapter(f: "type[ModelDTOT]") -> "TypeAdapter[ModelDTOT]":
    """Caches and returns a pydantic type adapter.

    Args:
        f: Type to create a type adapter for.

    Returns:
        :class:`pydantic.TypeAdapter`[:class:`typing.TypeVar`[T]]
    """
    from pydantic import TypeAdapter

    return TypeAdapter(f)


def _decode(row: "Mapping[str, Any]", schema_type: Any) -> Any:
    if is_from_row_type(schema_type):
        return schema_type.from_row(row)
    if schema_type is dict:
        return dict(row)
    if is_named_tuple(schema_type):
        return schema_type(**row)
    if schema_type is tuple:
        return tuple(row.values())
    if is_dataclass(schema_type):
        return schema_type(**row)
    if is_msgspec_struct(schema_type):
        from msgspec import convert

        return convert(obj=dict(row), type=schema_type, strict=False, dec_hook=_default_msgspec_deserializer)
    if is_pydantic_model(schema_type):
        return get_type_adapter(schema_type).validate_python(dict(row), from_attributes=True)
    if is_attrs_schema(schema_type):
        return schema_type(**row)
    msg = (
        "`schema_type` should implement `from_row` or be a Dataclass, NamedTuple, Pydantic model, "
        f"Msgspec struct, Attrs class, tuple or dict, got {schema_type!r}"
    )
    raise RowDecodeError(msg)


def decode_row(row: "Mapping[str, Any]", schema_type: "Optional[type[ModelDTOT]]" = None) -> "ModelDTOT":
    """Decode one engine row into ``schema_type``.

    Args:
        row: Column-keyed row produced by an executor.
        schema_type: Result type. ``None`` returns the row as a ``dict``.

    Raises:
        RowDecodeError: The type is unsupported or rejected the row.

    Returns:
        The decoded row.
    """
    if schema_type is None:
        return cast("ModelDTOT", dict(row))
    try:
        return cast("ModelDTOT", _decode(row, schema_type))
    except RowDecodeError:
        raise
    except Exception as e:
        name = getattr(schema_type, "__name__", repr(schema_type))
        msg = f"Failed to decode row into {name}: {e}"
        raise RowDecodeError(msg) from e


def decode_rows(
    rows: "list[dict[str, Any]]", schema_type: "Optional[type[ModelDTOT]]" = None
) -> "list[ModelDTOT]":
    """Decode every row in engine order."""
    return [decode_row(row, schema_type) for row in rows]
