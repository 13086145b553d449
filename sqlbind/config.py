"""Binding configuration."""

from typing import Any, Final

from sqlbind.exceptions import ImproperConfigurationError
from sqlbind.parameters import PLACEHOLDER_PATTERN, ParameterStyle

__all__ = ("DEFAULT_BIND_CONFIG", "BindConfig")


class BindConfig:
    """Settings shared by prepared statements.

    Treat instances as immutable; use :meth:`replace` to derive a variant.

    Args:
        parameter_style: Positional marker family the template is rendered with.
        strict_binding: Raise :class:`~sqlbind.exceptions.UnboundPlaceholderError`
            before dispatch when the binder leaves an occurrence unbound. When
            ``False`` the short argument list is sent as is and the engine
            rejects it.
        placeholder_pattern: Regular expression matching one named placeholder.
        log_statements: Log the positional SQL at DEBUG on every dispatch.
    """

    __slots__ = ("log_statements", "parameter_style", "placeholder_pattern", "strict_binding")

    def __init__(
        self,
        parameter_style: "ParameterStyle | str" = ParameterStyle.QMARK,
        strict_binding: bool = True,
        placeholder_pattern: str = PLACEHOLDER_PATTERN,
        log_statements: bool = False,
    ) -> None:
        try:
            self.parameter_style = ParameterStyle(parameter_style)
        except ValueError as e:
            msg = f"Unsupported parameter style: {parameter_style!r}"
            raise ImproperConfigurationError(msg) from e
        if not placeholder_pattern:
            msg = "placeholder_pattern must not be empty"
            raise ImproperConfigurationError(msg)
        self.strict_binding = strict_binding
        self.placeholder_pattern = placeholder_pattern
        self.log_statements = log_statements

    def replace(self, **kwargs: Any) -> "BindConfig":
        """Return a copy with the given attributes replaced.

        Raises:
            TypeError: If an unknown attribute is given.
        """
        for key in kwargs:
            if key not in self.__slots__:
                msg = f"{key!r} is not a field in {type(self).__name__}"
                raise TypeError(msg)
        current = {name: getattr(self, name) for name in self.__slots__}
        current.update(kwargs)
        return type(self)(**current)

    def __repr__(self) -> str:
        field_strs = [f"{name}={getattr(self, name)!r}" for name in self.__slots__]
        return f"{self.__class__.__name__}({', '.join(field_strs)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BindConfig):
            return False
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __hash__(self) -> int:
        return hash(tuple(getattr(self, name) for name in self.__slots__))


DEFAULT_BIND_CONFIG: Final[BindConfig] = BindConfig()
