"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the factory relies on so it can validate and
write to log destinations without depending on a concrete implementation.

Contents
--------
* :class:`Sink` – a writable destination for serialised log records.
* :class:`SinkProvider` – validates user input and turns it into sinks.
* :class:`FileLoader` – parses a routing file into a mapping.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). The default adapter in
:mod:`lib_cant_errors.adapters.sinks.default` implements
:class:`SinkProvider`; tests and host applications may pass their own.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Writable destination for log records.

    Why
    ----
    Streams, files, TTYs and in-memory buffers all expose ``write``; the
    factory only needs that.
    """

    def write(self, payload: Any, /) -> Any:
        """Write *payload*; return value is ignored."""


class FileLoader(Protocol):
    """Parse a routing file into a mapping.

    Why
    ----
    Segregate parsing concerns (TOML/JSON/YAML) from routing validation.
    """

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping representation or raise ``InvalidFormat``."""


class SinkProvider(Protocol):
    """Validate values and convert them into sinks.

    Why
    ----
    Keep stream recognition and path opening out of the factory so both can be
    replaced (e.g. by an application-wide file handle cache).
    """

    def validate(self, value: Any) -> Any:
        """Return a sink or a list of sinks, or raise ``InvalidSinkTypeError``."""
