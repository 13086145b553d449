"""Bookkeeping shared by prepared statements.

A prepared statement owns only the positional SQL, the ordered placeholder
names and the binder. Builders refer to the statement's SQL and would go stale
or leak state if kept, so a new one is created inside every call and handed to
the executor from that call's frame.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from mypy_extensions import mypyc_attr

from sqlbind.builder import Query
from sqlbind.config import DEFAULT_BIND_CONFIG, BindConfig
from sqlbind.exceptions import BinderError, ParameterStyleMismatchError, UnboundPlaceholderError
from sqlbind.parameters import ParameterStyle, parse_template
from sqlbind.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlbind.protocols import AsyncExecutorProtocol

__all__ = ("PreparedStatementBase",)

logger = get_logger("statement")

QueryT = TypeVar("QueryT", bound=Query)


@mypyc_attr(allow_interpreted_subclasses=True)
class PreparedStatementBase(ABC, Generic[QueryT]):
    """Positional SQL, placeholder order and binder held together.

    The binder is called once per placeholder occurrence with the in-progress
    builder and the placeholder name (``":id"``). It binds a value with
    ``query.bind(value)`` for names it recognises and returns the builder
    unchanged otherwise. A binder usually closes over the values of one
    logical query; build a new statement, or at least a new binder, per call
    site rather than mutating a shared one between calls.

    Statements are not reentrant: do not run the same instance from concurrent
    tasks.

    Args:
        template: SQL with ``:name`` placeholders.
        binder: ``(query, name) -> query`` callable.
        parameter_style: Marker family to render, overriding ``config``.
        config: Binding configuration.

    Raises:
        TemplateParseError: The placeholder pattern could not be compiled.
    """

    __slots__ = ("_binder", "_config", "_order", "_sql")

    def __init__(
        self,
        template: str,
        binder: "Callable[[QueryT, str], QueryT]",
        *,
        parameter_style: "Optional[ParameterStyle | str]" = None,
        config: "Optional[BindConfig]" = None,
    ) -> None:
        config = config or DEFAULT_BIND_CONFIG
        if parameter_style is not None:
            config = config.replace(parameter_style=parameter_style)
        self._sql, self._order = parse_template(template, config.parameter_style, pattern=config.placeholder_pattern)
        self._binder = binder
        self._config = config

    @property
    def sql(self) -> str:
        """Positional SQL."""
        return self._sql

    @property
    def order(self) -> "tuple[str, ...]":
        """Placeholder names in order of occurrence, duplicates included."""
        return self._order

    @property
    def parameter_style(self) -> ParameterStyle:
        return self._config.parameter_style

    @property
    def config(self) -> BindConfig:
        return self._config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self._sql!r}, order={self._order!r})"

    @abstractmethod
    def _new_query(self) -> QueryT:
        """Create the empty builder one call binds into."""

    def _check_executor(self, executor: "AsyncExecutorProtocol") -> None:
        executor_style = getattr(executor, "parameter_style", None)
        if executor_style is None:
            return
        try:
            expected = ParameterStyle(executor_style)
        except ValueError:
            msg = (
                f"Statement uses {self.parameter_style} placeholders but "
                f"{type(executor).__name__} declares unsupported style {executor_style!r}"
            )
            raise ParameterStyleMismatchError(msg, self._sql) from None
        if expected is self.parameter_style:
            return
        msg = f"Statement uses {self.parameter_style} placeholders but {type(executor).__name__} expects {expected}"
        raise ParameterStyleMismatchError(msg, self._sql)

    def _bind(self, query: QueryT) -> QueryT:
        """Replay the binder over every placeholder occurrence.

        Raises:
            BinderError: The binder returned something other than a builder, or
                bound several values for one occurrence under strict binding.
            UnboundPlaceholderError: Strict binding is on and an occurrence
                received no value.
        """
        builder_type = type(query)
        unbound: list[str] = []
        for name in self._order:
            before = query.bound_count
            query = self._binder(query, name)
            if not isinstance(query, builder_type):
                msg = (
                    f"Binder returned {type(query).__name__} for placeholder {name!r}, "
                    f"expected {builder_type.__name__}"
                )
                raise BinderError(msg, self._sql)
            added = query.bound_count - before
            if added == 0:
                unbound.append(name)
            elif added > 1 and self._config.strict_binding:
                msg = f"Binder bound {added} values for placeholder {name!r}, expected 1"
                raise BinderError(msg, self._sql)
        if unbound and self._config.strict_binding:
            raise UnboundPlaceholderError(unbound[0], self._sql, names=unbound)
        if unbound:
            logger.debug(
                "Dispatching with %d unbound placeholder(s): %s",
                len(unbound),
                ", ".join(unbound),
                extra={"extra_fields": {"unbound": list(unbound)}},
            )
        return query

    def _prepare(self, executor: "AsyncExecutorProtocol", operation: str) -> QueryT:
        """Check the executor, build a fresh builder and bind it."""
        self._check_executor(executor)
        query = self._bind(self._new_query())
        extra_fields: dict[str, Any] = {"operation": operation, "parameter_count": query.bound_count}
        if self._config.log_statements:
            extra_fields["sql"] = self._sql
        logger.debug("Dispatching %s", operation, extra={"extra_fields": extra_fields})
        return query
