"""Severity routing and bulk definition of error kinds.

Purpose
-------
Let an application define all of its error kinds in one place and route their
log output by severity (``info`` to stdout, ``error`` to stderr and a file,
...). The routing table is an explicit value passed to :func:`define_errors`
rather than process-wide state.

Contents
--------
* :class:`SinkRegistry` – immutable severity -> sinks mapping.
* :data:`EMPTY_REGISTRY` – canonical registry without routes.
* :func:`define_errors` – names, routes and finalises a mapping of builders.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator

from ..adapters.sinks.default import DefaultSinkProvider
from ..observability import log_debug, make_event
from .factory import ErrorFactory
from .kind import CantError
from .ports import SinkProvider


@dataclass(frozen=True, slots=True)
class SinkRegistry(Mapping[str, tuple[Any, ...]]):
    """Read-only mapping from severity level to the sinks that receive it.

    Why
    ----
    Routing decisions belong to the application's composition code; holding
    them in a value keeps tests isolated and makes lifetime explicit.

    Examples
    --------
    >>> import io
    >>> buffer = io.StringIO()
    >>> registry = SinkRegistry.from_mapping({"error": buffer})
    >>> registry.route("error") == (buffer,)
    True
    >>> registry.route("info") is None
    True
    """

    _routes: Mapping[str, tuple[Any, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_routes", MappingProxyType(dict(self._routes)))

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        provider: SinkProvider | None = None,
    ) -> SinkRegistry:
        """Validate every value of *mapping* and return a registry.

        Raises
        ------
        InvalidSinkTypeError
            When any value is not a sink, a path or a list of those.
        """

        active = provider or DefaultSinkProvider()
        routes: dict[str, tuple[Any, ...]] = {}
        for level, value in mapping.items():
            validated = active.validate(value)
            routes[level] = tuple(validated) if isinstance(validated, (list, tuple)) else (validated,)
        return cls(routes)

    def route(self, level: str | None) -> tuple[Any, ...] | None:
        """Return the sinks configured for *level*, or ``None``."""

        if level is None:
            return None
        return self._routes.get(level)

    def __getitem__(self, level: str) -> tuple[Any, ...]:
        return self._routes[level]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)


EMPTY_REGISTRY = SinkRegistry()


def define_errors(
    builders: Mapping[str, ErrorFactory],
    registry: SinkRegistry | None = None,
) -> dict[str, type[CantError]]:
    """Finalise every builder in *builders*, naming each kind after its key.

    What
    ----
    For each entry the builder's name is set to the key; when *registry* has
    sinks for the builder's severity level they replace the builder's sinks.
    The builders are modified in place, as with direct ``set_*`` calls.

    Examples
    --------
    >>> from lib_cant_errors.application.factory import cant
    >>> errors = define_errors({
    ...     "DBPasswordError": cant("access the %s database").set_because_template("that password isn't valid"),
    ... })
    >>> errors["DBPasswordError"]("main").message
    "Can't access the main database because that password isn't valid"
    """

    active = registry or EMPTY_REGISTRY
    kinds: dict[str, type[CantError]] = {}
    for name, builder in builders.items():
        builder.set_name(name)
        routed = active.route(builder.severity_level)
        if routed is not None:
            builder.set_sinks(list(routed))
            log_debug("error_kind_routed", **make_event(name, builder.severity_level, {"sinks": len(routed)}))
        kinds[name] = builder.finalize()
    return kinds


__all__ = ["EMPTY_REGISTRY", "SinkRegistry", "define_errors"]
