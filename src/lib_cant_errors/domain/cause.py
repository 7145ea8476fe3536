"""Cause contract used to chain one error's reason into another.

Purpose
-------
When a kind is defined with ``because`` derived from a cause, its last
argument is an earlier failure. This module turns that argument into an
explicit :class:`Cause` so the kind can read an optional ``level`` and
``status`` and a ``describe()`` text without probing arbitrary objects.

Contents
--------
* :class:`Cause` – protocol shared by both variants.
* :class:`ChainedInstance` – wraps an error produced by this library and
  describes it by its because-fragment only.
* :class:`ExternalFailure` – wraps any other value (exceptions included).
* :func:`as_cause` – picks the variant for a value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .formatting import BECAUSE_SEPARATOR


@runtime_checkable
class Cause(Protocol):
    """Anything that can feed a because-clause."""

    @property
    def level(self) -> str | None:
        """Severity that overrides the receiving kind's level, if any."""

    @property
    def status(self) -> int | None:
        """HTTP status that overrides the receiving kind's status, if any."""

    def describe(self) -> str:
        """Return the text substituted into the because-clause."""


@dataclass(frozen=True, slots=True)
class ChainedInstance:
    """Cause backed by an error produced by this library.

    ``describe`` drops the wrapped error's own can't-clause so reasons chain
    transitively without repeating subsumed actions.

    Examples
    --------
    >>> class _Fake:
    ...     message = "Can't do generic thing because specific reason"
    ...     level = "error"
    ...     status = 500
    >>> ChainedInstance(_Fake()).describe()
    'specific reason'
    """

    error: Any

    @property
    def level(self) -> str | None:
        return getattr(self.error, "level", None)

    @property
    def status(self) -> int | None:
        return getattr(self.error, "status", None)

    def describe(self) -> str:
        _, separator, reason = str(self.error.message).partition(BECAUSE_SEPARATOR)
        return reason if separator else ""


@dataclass(frozen=True, slots=True)
class ExternalFailure:
    """Cause backed by an arbitrary value, usually a foreign exception.

    Examples
    --------
    >>> ExternalFailure(ValueError("disk full")).describe()
    'disk full'
    >>> ExternalFailure("plain text").level is None
    True
    """

    value: Any

    @property
    def level(self) -> str | None:
        return getattr(self.value, "level", None)

    @property
    def status(self) -> int | None:
        return getattr(self.value, "status", None)

    def describe(self) -> str:
        message = getattr(self.value, "message", None)
        if isinstance(message, str) and message:
            return message
        return str(self.value)


def as_cause(value: Any) -> Cause:
    """Wrap *value* in the matching :class:`Cause` variant."""

    if not isinstance(value, type) and getattr(value, "is_cant_error", False) is True:
        return ChainedInstance(value)
    return ExternalFailure(value)


__all__ = ["Cause", "ChainedInstance", "ExternalFailure", "as_cause"]
