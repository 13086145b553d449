from asyncio import CancelledError, current_task
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "BinderError",
    "EngineCancelledError",
    "EngineError",
    "ImproperConfigurationError",
    "IntegrityError",
    "MissingDependencyError",
    "MultipleResultsFoundError",
    "NotFoundError",
    "OperationalError",
    "ParameterError",
    "ParameterStyleMismatchError",
    "RowDecodeError",
    "SQLBindError",
    "TemplateParseError",
    "UnboundPlaceholderError",
    "wrap_engine_errors",
)


class SQLBindError(Exception):
    """Base exception class from which all sqlbind exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLBindError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(SQLBindError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install sqlbind[{install_package or package}]' to install sqlbind with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class ImproperConfigurationError(SQLBindError):
    """Improper Configuration error.

    Raised when a :class:`~sqlbind.config.BindConfig` holds values that cannot be used.
    """


class TemplateParseError(SQLBindError):
    """The placeholder pattern could not be compiled."""

    def __init__(self, message: Optional[str] = None, pattern: Optional[str] = None) -> None:
        if message is None:
            message = "Failed to parse SQL template."
        detail_message = message
        if pattern:
            detail_message = f"{message} (Pattern: {pattern})"
        super().__init__(detail=detail_message)
        self.pattern = pattern


# -- Parameter Errors --
class ParameterError(SQLBindError):
    """Base class for parameter-related errors."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class UnboundPlaceholderError(ParameterError):
    """A placeholder occurrence was not bound by the binder.

    ``name`` is the first unbound placeholder; ``names`` lists every unbound
    occurrence in template order.
    """

    def __init__(self, name: str, sql: Optional[str] = None, names: "Optional[Sequence[str]]" = None) -> None:
        self.name = name
        self.names: tuple[str, ...] = tuple(names) if names else (name,)
        message = f"Placeholder {name!r} was not bound by the binder function"
        if len(self.names) > 1:
            message = f"{message} (unbound: {', '.join(self.names)})"
        super().__init__(message, sql)


class BinderError(ParameterError):
    """The binder did not honour the ``(builder, name) -> builder`` contract."""


class ParameterStyleMismatchError(ParameterError):
    """Error when the executor's placeholder style doesn't match the statement's.

    Raised before dispatch when a statement rendered with one positional marker
    family (``?``, ``$1``, ``%s``...) is handed to an executor expecting another.
    """


# -- Engine Errors --
class EngineError(SQLBindError):
    """Any failure originating from the execution engine.

    The original exception is preserved as ``__cause__``.
    """


class IntegrityError(EngineError):
    """Data integrity error (constraint violation)."""


class OperationalError(EngineError):
    """Operational engine error (connectivity, locking, malformed SQL)."""


class NotFoundError(EngineError):
    """A single row was required but none were returned."""


class MultipleResultsFoundError(EngineError):
    """At most one row was required but more than one were returned."""


class RowDecodeError(EngineError):
    """An engine row could not be decoded into the requested result type."""


class EngineCancelledError(EngineError, CancelledError):
    """The engine call was cancelled while the running task was not.

    Also an :class:`asyncio.CancelledError` so task cancellation keeps working.
    """


def _task_is_cancelling() -> bool:
    """Whether the running task has a pending ``cancel()`` request."""
    try:
        task = current_task()
    except RuntimeError:
        return False
    cancelling = getattr(task, "cancelling", None)
    return cancelling is not None and cancelling() > 0


@contextmanager
def wrap_engine_errors(operation: str = "execute") -> Generator[None, None, None]:
    """Wrap anything raised by an executor as :class:`EngineError`.

    Errors that already belong to this library pass through untouched, as does
    a :class:`asyncio.CancelledError` delivered because the running task itself
    was cancelled (``task.cancel()``, ``asyncio.timeout``).

    Args:
        operation: Name of the executor operation, used in the error message.

    Raises:
        EngineCancelledError: The engine call was cancelled by the engine.
        EngineError: The engine call failed.
    """
    try:
        yield
    except SQLBindError:
        raise
    except CancelledError as exc:
        if _task_is_cancelling():
            raise
        msg = f"Engine {operation} was cancelled"
        raise EngineCancelledError(msg) from exc
    except Exception as exc:
        msg = f"Engine {operation} failed: {exc}"
        raise EngineError(msg) from exc
