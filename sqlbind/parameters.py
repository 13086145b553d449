"""Named placeholder parsing.

Turns a template written with ``:name`` placeholders into the positional form
an engine understands, together with the ordered list of placeholder
occurrences the binder is replayed against.

The scan is purely textual. Placeholder-shaped text inside string literals,
comments or ``::type`` casts is treated as a placeholder too.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import Callable, Final, NamedTuple

from sqlbind.exceptions import TemplateParseError

__all__ = (
    "PLACEHOLDER_PATTERN",
    "ParameterStyle",
    "ParsedTemplate",
    "compile_placeholder_pattern",
    "convert_placeholders",
    "count_markers",
    "parse_template",
)

PLACEHOLDER_PATTERN: Final[str] = r":[a-zA-Z0-9_]+"
"""Colon followed by one or more ASCII letters, digits or underscores."""


class ParameterStyle(str, Enum):
    """Positional marker families understood by execution engines."""

    QMARK = "qmark"
    NUMERIC = "numeric"
    POSITIONAL_COLON = "positional_colon"
    POSITIONAL_PYFORMAT = "pyformat_positional"

    def __str__(self) -> str:
        """String representation for better error messages."""
        return self.value


_MARKER_RENDERERS: Final[dict[ParameterStyle, Callable[[int], str]]] = {
    ParameterStyle.QMARK: lambda _: "?",
    ParameterStyle.NUMERIC: lambda ordinal: f"${ordinal}",
    ParameterStyle.POSITIONAL_COLON: lambda ordinal: f":{ordinal}",
    ParameterStyle.POSITIONAL_PYFORMAT: lambda _: "%s",
}

_MARKER_PATTERNS: Final[dict[ParameterStyle, "re.Pattern[str]"]] = {
    ParameterStyle.QMARK: re.compile(r"\?"),
    ParameterStyle.NUMERIC: re.compile(r"\$\d+"),
    ParameterStyle.POSITIONAL_COLON: re.compile(r":\d+"),
    ParameterStyle.POSITIONAL_PYFORMAT: re.compile(r"%s"),
}


class ParsedTemplate(NamedTuple):
    """Positional SQL plus placeholder names in order of occurrence."""

    sql: str
    order: tuple[str, ...]


@lru_cache(maxsize=32)
def compile_placeholder_pattern(pattern: str = PLACEHOLDER_PATTERN) -> "re.Pattern[str]":
    """Compile a placeholder pattern.

    Args:
        pattern: Regular expression matching one placeholder, marker included.

    Raises:
        TemplateParseError: If the pattern is not a valid regular expression.

    Returns:
        The compiled pattern.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        msg = f"Failed to parse SQL template: {e}"
        raise TemplateParseError(msg, pattern=pattern) from e


def parse_template(
    template: str, parameter_style: ParameterStyle = ParameterStyle.QMARK, *, pattern: str = PLACEHOLDER_PATTERN
) -> ParsedTemplate:
    """Convert named placeholders to positional markers.

    Every match is recorded verbatim (leading ``:`` included) and replaced by
    one positional marker. Duplicates yield one entry and one marker each.

    Args:
        template: SQL with ``:name`` placeholders.
        parameter_style: Marker family to render.
        pattern: Placeholder pattern.

    Raises:
        TemplateParseError: If the placeholder pattern cannot be compiled.

    Returns:
        The positional SQL and the ordered placeholder names.

    Example:
        >>> parse_template("SELECT * FROM users WHERE id = :id OR user_id = :id")
        ParsedTemplate(sql='SELECT * FROM users WHERE id = ? OR user_id = ?', order=(':id', ':id'))
    """
    regex = compile_placeholder_pattern(pattern)
    render = _MARKER_RENDERERS[ParameterStyle(parameter_style)]
    order: list[str] = []

    def _replace(match: "re.Match[str]") -> str:
        order.append(match.group(0))
        return render(len(order))

    sql = regex.sub(_replace, template)
    return ParsedTemplate(sql, tuple(order))


def convert_placeholders(template: str, parameter_style: ParameterStyle = ParameterStyle.QMARK) -> str:
    """Return ``template`` with every named placeholder replaced by a positional marker.

    Example:
        >>> convert_placeholders("SELECT * FROM users WHERE id = :id AND name = :name")
        'SELECT * FROM users WHERE id = ? AND name = ?'
    """
    return parse_template(template, parameter_style).sql


def count_markers(sql: str, parameter_style: ParameterStyle = ParameterStyle.QMARK) -> int:
    """Count the positional markers of ``parameter_style`` in ``sql``."""
    return len(_MARKER_PATTERNS[ParameterStyle(parameter_style)].findall(sql))
