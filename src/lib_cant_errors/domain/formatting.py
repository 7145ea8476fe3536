"""Placeholder counting and printf-style clause formatting.

Purpose
-------
Keep the text-level rules of "Can't X because Y" messages in one pure module:
counting the typed placeholders of a template, substituting arguments into a
template, and assembling the two clauses into the final message.

Contents
--------
* :func:`count_placeholders` – number of ``%s``/``%d``/``%j`` markers.
* :func:`format_template` – substitutes arguments into a template.
* :func:`compose_message` – joins both clauses and normalises whitespace.

System Role
-----------
Used by :mod:`lib_cant_errors.application.factory` when a kind is finalised
(counting) and by :mod:`lib_cant_errors.application.kind` whenever an error is
constructed (formatting and composition). The module performs no I/O.
"""

from __future__ import annotations

import json
import math
import numbers
import re
from typing import Any, Callable, Final, Sequence

PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"%[sdj]")
"""Markers that consume one argument each."""

_DIRECTIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"%[sdj%]")
_WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\s\xa0]+")
_DECIMAL_LITERAL: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)"
)
_PREFIXED_LITERAL: Final[re.Pattern[str]] = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")

CANT_PREFIX: Final[str] = "Can't "
BECAUSE_SEPARATOR: Final[str] = "because "


def count_placeholders(template: str) -> int:
    """Return how many valid placeholders *template* contains.

    What
    ----
    Non-overlapping left-to-right count of ``%s``, ``%d`` and ``%j``. Empty
    templates and templates without markers count as zero.

    Examples
    --------
    >>> count_placeholders("access the %s database as %j")
    2
    >>> count_placeholders("")
    0
    >>> count_placeholders("%%s")
    1
    """

    return len(PLACEHOLDER_PATTERN.findall(template))


def format_template(template: str, args: Sequence[Any]) -> str:
    """Substitute *args* into *template* the way printf-style formatters do.

    What
    ----
    ``%s`` renders ``str(value)``, ``%d`` renders the numeric coercion of the
    value (``NaN`` when it is not numeric), ``%j`` renders compact JSON and
    ``%%`` renders a literal percent sign without consuming an argument.
    Markers left over once *args* run out stay literal; arguments left over
    once the markers run out are appended, separated by spaces.

    Examples
    --------
    >>> format_template("reason %s", ["two"])
    'reason two'
    >>> format_template("reason %d", ["two"])
    'reason NaN'
    >>> format_template("reason %j", [{"two": 2}])
    'reason {"two":2}'
    >>> format_template("%s and %s", ["one"])
    'one and %s'
    """

    values = list(args)
    position = 0

    def _substitute(match: re.Match[str]) -> str:
        nonlocal position
        directive = match.group(0)
        if directive == "%%":
            return "%"
        if position >= len(values):
            return directive
        value = values[position]
        position += 1
        return _CONVERTERS[directive[1]](value)

    text = _DIRECTIVE_PATTERN.sub(_substitute, template)
    if position < len(values):
        text = " ".join([text, *(str(value) for value in values[position:])])
    return text


def compose_message(cant_clause: str, because_clause: str) -> str:
    """Join both clauses into a single trimmed, whitespace-collapsed message.

    Examples
    --------
    >>> compose_message("do thing ", " reason")
    "Can't do thing because reason"
    >>> compose_message("", "")
    "Can't because"
    """

    message = f"{CANT_PREFIX}{cant_clause} {BECAUSE_SEPARATOR}{because_clause}".strip()
    return _WHITESPACE_PATTERN.sub(" ", message)


def _as_string(value: Any) -> str:
    return str(value)


def _as_number(value: Any) -> str:
    """Render *value* after numeric coercion; non-numeric input becomes ``NaN``."""

    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if value is None:
        return "0"
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, str):
        return _render_float(_parse_number(value))
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Number) or hasattr(type(value), "__float__"):
        try:
            return _render_float(float(value))
        except (TypeError, ValueError, OverflowError):
            # complex values and signalling decimals have no float form
            return "NaN"
    return "NaN"


def _parse_number(text: str) -> float:
    """Parse a numeric literal, returning ``nan`` when *text* is not one."""

    literal = text.strip()
    if not literal:
        return 0.0
    if _PREFIXED_LITERAL.fullmatch(literal):
        return float(int(literal, 0))
    if _DECIMAL_LITERAL.fullmatch(literal):
        return float(literal.replace("Infinity", "inf"))
    return math.nan


def _render_float(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _as_json(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    except ValueError:
        # json reports self-referencing containers as ValueError
        return "[Circular]"


_CONVERTERS: Final[dict[str, Callable[[Any], str]]] = {
    "s": _as_string,
    "d": _as_number,
    "j": _as_json,
}


__all__ = [
    "BECAUSE_SEPARATOR",
    "CANT_PREFIX",
    "PLACEHOLDER_PATTERN",
    "compose_message",
    "count_placeholders",
    "format_template",
]
