"""Error kinds: exception classes generated from an :class:`ErrorTemplate`.

Purpose
-------
Implement what happens when an error kind is instantiated: fitting the flat
argument list to both templates, chaining a nested cause, composing the
"Can't X because Y" message, and writing JSON log records to the kind's sinks.

Contents
--------
* :class:`CantError` – base class of every generated kind.
* :func:`make_error_kind` – builds a new ``CantError`` subclass closing over a
  frozen template.

System Role
-----------
:meth:`lib_cant_errors.application.factory.ErrorFactory.finalize` calls
:func:`make_error_kind`; application code raises, inspects or logs the
resulting instances.
"""

from __future__ import annotations

import json
import traceback
from datetime import datetime, timezone
from typing import Any, ClassVar, Sequence

from ..adapters.sinks.default import write_payload
from ..domain.cause import as_cause
from ..domain.formatting import compose_message, format_template
from ..domain.template import ErrorTemplate
from ..observability import log_debug, make_event


class CantError(Exception):
    """Base class of all errors produced by ``lib_cant_errors``.

    Why
    ----
    Generated kinds are ordinary exception classes, so application code can
    ``raise`` them and catch either one kind or every kind via ``CantError``.

    What
    ----
    Positional arguments fill the can't-template first and the because-template
    second. Missing arguments become empty strings and surplus arguments are
    ignored. When the kind derives its reason from a cause, the last consumed
    argument is that cause: its ``level`` and ``status`` win over the kind's
    own and its description replaces the argument.

    Examples
    --------
    >>> Kind = make_error_kind(ErrorTemplate(
    ...     name="DBUsernameError",
    ...     cant_template="access the %s database",
    ...     because_template="the username %s isn't valid",
    ...     cant_argc=1,
    ...     because_argc=1,
    ... ))
    >>> err = Kind("production", "root")
    >>> err.message
    "Can't access the production database because the username root isn't valid"
    >>> err.name, isinstance(err, CantError)
    ('DBUsernameError', True)
    """

    template: ClassVar[ErrorTemplate] = ErrorTemplate()
    is_cant_error: ClassVar[bool] = True

    message: str
    level: str | None
    status: int | None
    name: str
    stack: str | None

    def __init__(self, *args: Any) -> None:
        template = type(self).template
        argv = _fit_arguments(args, template.total_argc)
        cant_args = argv[: template.cant_argc]
        because_args = argv[template.cant_argc :]

        level = template.severity_level
        status = template.http_status
        if template.because_is_cause and because_args:
            cause = as_cause(because_args[0])
            if cause.level is not None:
                level = cause.level
            if cause.status is not None:
                status = cause.status
            because_args[0] = cause.describe()

        self.name = template.name
        self.level = level
        self.status = status
        self.message = compose_message(
            format_template(template.cant_template, cant_args),
            format_template(template.because_template, because_args),
        )
        super().__init__(self.message)
        self.stack = _capture_stack(self.name, self.message)

    def to_record(self, include_stack: bool = False) -> dict[str, Any]:
        """Return the log record written by :meth:`log`.

        Keys are ``level``, ``status``, ``message`` and ``date`` (UTC,
        millisecond precision), plus ``stack`` when *include_stack* is set and
        a stack was captured.
        """

        record: dict[str, Any] = {
            "level": self.level,
            "status": self.status,
            "message": self.message,
            "date": _timestamp(),
        }
        if include_stack and self.stack:
            record["stack"] = self.stack
        return record

    def log(self, include_stack: bool = False) -> None:
        """Write this error as one JSON line to every sink of its kind.

        Writes are independent and unflushed; a failing sink raises and the
        remaining sinks are not written.
        """

        sinks = type(self).template.sinks
        payload = json.dumps(self.to_record(include_stack), separators=(",", ":"), ensure_ascii=False) + "\n"
        for sink in sinks:
            write_payload(sink, payload)
        log_debug("error_logged", **make_event(self.name, self.level, {"sinks": len(sinks)}))


def make_error_kind(template: ErrorTemplate) -> type[CantError]:
    """Return a new :class:`CantError` subclass bound to *template*.

    Examples
    --------
    >>> Kind = make_error_kind(ErrorTemplate(name="DiskError"))
    >>> Kind.__name__, Kind.template.name
    ('DiskError', 'DiskError')
    """

    return type(template.name, (CantError,), {"template": template, "__module__": __name__})


def _fit_arguments(args: Sequence[Any], total: int) -> list[Any]:
    """Pad *args* with empty strings or cut them to exactly *total* items.

    Examples
    --------
    >>> _fit_arguments(("one",), 3)
    ['one', '', '']
    >>> _fit_arguments(("one", "two", "three"), 2)
    ['one', 'two']
    """

    fitted = list(args[:total])
    fitted.extend([""] * (total - len(fitted)))
    return fitted


def _capture_stack(name: str, message: str) -> str:
    """Render the construction-time stack, excluding this module's frames."""

    frames = [frame for frame in traceback.extract_stack() if frame.filename != __file__]
    return f"{name}: {message}\n" + "".join(traceback.format_list(frames)).rstrip("\n")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = ["CantError", "make_error_kind"]
