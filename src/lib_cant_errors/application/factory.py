"""Fluent builder that turns error definitions into error kinds.

Purpose
-------
Accumulate the pieces of an error definition (name, both clause templates,
HTTP status, severity level, sinks) through chained calls, then freeze them
into an :class:`ErrorTemplate` and generate the matching ``CantError``
subclass.

Contents
--------
* :data:`CAUSE` – marker passed to :meth:`ErrorFactory.set_because_template`
  to derive the reason from a nested cause.
* :class:`ErrorFactory` – the builder.
* :func:`cant` – shortcut creating a builder with the can't-template set.

System Role
-----------
Entry point of the public API. Bulk definition through
:func:`lib_cant_errors.application.registry.define_errors` drives the same
builder.
"""

from __future__ import annotations

import sys
from typing import Any, Final

from ..adapters.sinks.default import DefaultSinkProvider
from ..domain.formatting import count_placeholders
from ..domain.template import CAUSE_TEMPLATE, DEFAULT_NAME, ErrorTemplate
from ..observability import log_debug, make_event
from .kind import CantError, make_error_kind
from .ports import SinkProvider


class _CauseMarker:
    """Type of the :data:`CAUSE` singleton."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "CAUSE"


CAUSE: Final[_CauseMarker] = _CauseMarker()
"""Marker meaning "take the because-clause from the cause argument"."""


class ErrorFactory:
    """Build ``CantError`` kinds through a chained, semantic API.

    Why
    ----
    Errors are defined once, typically in one module, and raised in many
    places. A builder keeps those definitions short and readable.

    What
    ----
    Every ``set_*`` method returns the builder itself. :meth:`finalize`
    snapshots the current state and returns a new exception class; later
    changes to the builder do not reach kinds that were already produced.

    Parameters
    ----------
    sink_provider:
        Validates values passed to :meth:`set_sinks`. Defaults to
        :class:`DefaultSinkProvider`.

    Examples
    --------
    >>> DBUsernameError = (
    ...     ErrorFactory()
    ...     .set_name("DBUsernameError")
    ...     .set_cant_template("access the %s database")
    ...     .set_because_template("the username %s isn't valid")
    ...     .set_http_status(401)
    ...     .set_severity_level("warn")
    ...     .finalize()
    ... )
    >>> err = DBUsernameError("production", "root")
    >>> err.status, err.level
    (401, 'warn')
    """

    def __init__(self, *, sink_provider: SinkProvider | None = None) -> None:
        self._sink_provider: SinkProvider = sink_provider or DefaultSinkProvider()
        self._name = DEFAULT_NAME
        self._cant_template = ""
        self._because_template = ""
        self._because_is_cause = False
        self._http_status: int | None = None
        self._severity_level: str | None = None
        self._sinks: tuple[Any, ...] = (sys.stderr,)

    @property
    def name(self) -> str:
        return self._name

    @property
    def cant_template(self) -> str:
        return self._cant_template

    @property
    def because_template(self) -> str:
        return self._because_template

    @property
    def because_is_cause(self) -> bool:
        return self._because_is_cause

    @property
    def http_status(self) -> int | None:
        return self._http_status

    @property
    def severity_level(self) -> str | None:
        return self._severity_level

    @property
    def sinks(self) -> tuple[Any, ...]:
        return self._sinks

    def set_name(self, name: str) -> ErrorFactory:
        self._name = name
        return self

    def set_cant_template(self, template: str) -> ErrorFactory:
        """Set the format string of the "Can't X" clause."""

        self._cant_template = template
        return self

    def set_because_template(self, template: str | _CauseMarker) -> ErrorFactory:
        """Set the format string of the "because Y" clause, or :data:`CAUSE`.

        Passing :data:`CAUSE` makes the kind expect a cause as its last
        argument. A cause produced by this library contributes only its own
        because-clause, level and status; any other value contributes its
        message.

        Examples
        --------
        >>> factory = ErrorFactory().set_because_template(CAUSE)
        >>> factory.because_template, factory.because_is_cause
        ('%s', True)
        """

        if template is CAUSE:
            self._because_template = CAUSE_TEMPLATE
            self._because_is_cause = True
        else:
            self._because_template = template  # type: ignore[assignment]
            self._because_is_cause = False
        return self

    def set_http_status(self, status: int | None) -> ErrorFactory:
        self._http_status = status
        return self

    def set_severity_level(self, level: str | None) -> ErrorFactory:
        self._severity_level = level
        return self

    def set_sinks(self, sinks: Any) -> ErrorFactory:
        """Validate *sinks* (one value or a list) and store them as a tuple.

        Raises
        ------
        InvalidSinkTypeError
            When any value is not a writable sink or a path.
        """

        validated = self._sink_provider.validate(sinks)
        if not isinstance(validated, (list, tuple)):
            validated = [validated]
        self._sinks = tuple(validated)
        return self

    def finalize(self) -> type[CantError]:
        """Freeze the current definition and return a new error kind."""

        template = ErrorTemplate(
            name=self._name,
            cant_template=self._cant_template,
            because_template=self._because_template,
            because_is_cause=self._because_is_cause,
            http_status=self._http_status,
            severity_level=self._severity_level,
            sinks=self._sinks,
            cant_argc=count_placeholders(self._cant_template),
            because_argc=count_placeholders(self._because_template),
        )
        log_debug(
            "error_kind_created",
            **make_event(template.name, template.severity_level, {"argc": template.total_argc}),
        )
        return make_error_kind(template)


def cant(template: str, *, sink_provider: SinkProvider | None = None) -> ErrorFactory:
    """Start a new definition whose "Can't X" clause is *template*.

    Examples
    --------
    >>> Kind = cant("save %s").set_because_template("the disk is full").finalize()
    >>> Kind("report.pdf").message
    "Can't save report.pdf because the disk is full"
    """

    return ErrorFactory(sink_provider=sink_provider).set_cant_template(template)


__all__ = ["CAUSE", "ErrorFactory", "cant"]
