"""Domain-level exception hierarchy.

Purpose
-------
Expose the configuration-time error taxonomy shared by the sink adapters, the
routing loaders, and the factory. Produced ``CantError`` kinds are the
library's *output* and live in :mod:`lib_cant_errors.application.kind`; the classes
below describe failures of the library itself.

Contents
--------
* :class:`CantConfigError` – umbrella base class for configuration failures.
* :class:`InvalidSinkTypeError` – a value cannot be turned into a sink.
* :class:`InvalidFormat` – a routing file cannot be parsed.
* :class:`NotFound` – a routing file is missing.

System Role
-----------
Adapters raise these exceptions synchronously while errors are being
configured. Callers catch :class:`CantConfigError` to handle all library
failures uniformly.
"""

from __future__ import annotations


class CantConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_cant_errors``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidSinkTypeError(CantConfigError, TypeError):
    """Raised when a value is neither a writable sink, a path, nor a list of those.

    Why
    ----
    Sink configuration happens once at start-up; a bad value must surface
    immediately instead of failing on the first ``log`` call.

    What
    ----
    Keeps the offending ``value`` and its ``observed_type`` name so callers and
    the CLI can report exactly what was passed.

    Examples
    --------
    >>> err = InvalidSinkTypeError(123)
    >>> err.observed_type
    'int'
    >>> str(err)
    "Can't validate sink because 123 must be a writable stream, socket or path string (int given)"
    """

    def __init__(self, value: object) -> None:
        self.value = value
        self.observed_type = type(value).__name__
        super().__init__(
            f"Can't validate sink because {value!r} must be a writable stream, "
            f"socket or path string ({self.observed_type} given)"
        )


class InvalidFormat(CantConfigError):
    """Raised when a routing file cannot be parsed into the expected shape.

    Typical Sources
    ---------------
    Structured file loaders (:mod:`tomllib`, :mod:`json`, :mod:`yaml`) and the
    routing validation in :mod:`lib_cant_errors.application.routing_config`.
    """


class NotFound(CantConfigError):
    """Represents a missing routing file."""
