"""sqlbind: named ``:placeholder`` binding for positional-only async SQL engines."""

from sqlbind import exceptions, parameters, utils
from sqlbind.__metadata__ import __version__
from sqlbind.builder import Query, QueryAs
from sqlbind.config import DEFAULT_BIND_CONFIG, BindConfig
from sqlbind.exceptions import (
    BinderError,
    EngineCancelledError,
    EngineError,
    IntegrityError,
    MultipleResultsFoundError,
    NotFoundError,
    OperationalError,
    ParameterError,
    ParameterStyleMismatchError,
    RowDecodeError,
    SQLBindError,
    TemplateParseError,
    UnboundPlaceholderError,
)
from sqlbind.parameters import ParameterStyle, ParsedTemplate, convert_placeholders, parse_template
from sqlbind.protocols import AsyncExecutorProtocol, FromRow
from sqlbind.query import PreparedQuery
from sqlbind.query_as import PreparedQueryAs
from sqlbind.result import ExecuteResult

__all__ = (
    "DEFAULT_BIND_CONFIG",
    "AsyncExecutorProtocol",
    "BindConfig",
    "BinderError",
    "EngineCancelledError",
    "EngineError",
    "ExecuteResult",
    "FromRow",
    "IntegrityError",
    "MultipleResultsFoundError",
    "NotFoundError",
    "OperationalError",
    "ParameterError",
    "ParameterStyle",
    "ParameterStyleMismatchError",
    "ParsedTemplate",
    "PreparedQuery",
    "PreparedQueryAs",
    "Query",
    "QueryAs",
    "RowDecodeError",
    "SQLBindError",
    "TemplateParseError",
    "UnboundPlaceholderError",
    "__version__",
    "convert_placeholders",
    "exceptions",
    "parameters",
    "parse_template",
    "utils",
)
