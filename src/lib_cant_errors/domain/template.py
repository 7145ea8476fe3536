"""Immutable snapshot of an error definition.

Purpose
-------
Anchor the :class:`ErrorTemplate` value object that the factory produces on
``finalize`` and that every generated error kind closes over. Holding the
state in a frozen dataclass keeps already-created kinds independent from the
builder that produced them.

Contents
--------
* :data:`DEFAULT_NAME` – name given to kinds that were never named.
* :data:`CAUSE_TEMPLATE` – the because-template used when the reason is
  derived from a nested cause.
* :class:`ErrorTemplate` – the frozen definition itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

DEFAULT_NAME: Final[str] = "Error"
CAUSE_TEMPLATE: Final[str] = "%s"


@dataclass(frozen=True, slots=True)
class ErrorTemplate:
    """Frozen definition of one error kind.

    Attributes
    ----------
    name:
        Type tag of the produced errors (also the generated class name).
    cant_template / because_template:
        Format strings of the two clauses.
    because_is_cause:
        ``True`` when the because-clause is derived from a cause argument.
    http_status / severity_level:
        Optional metadata inherited by every produced error.
    sinks:
        Validated writable destinations used by ``log``.
    cant_argc / because_argc:
        Placeholder counts computed once at finalize time.

    Examples
    --------
    >>> template = ErrorTemplate(cant_template="do %s", because_template="%s and %d", cant_argc=1, because_argc=2)
    >>> template.total_argc
    3
    """

    name: str = DEFAULT_NAME
    cant_template: str = ""
    because_template: str = ""
    because_is_cause: bool = False
    http_status: int | None = None
    severity_level: str | None = None
    sinks: tuple[Any, ...] = ()
    cant_argc: int = 0
    because_argc: int = 0

    @property
    def total_argc(self) -> int:
        return self.cant_argc + self.because_argc
