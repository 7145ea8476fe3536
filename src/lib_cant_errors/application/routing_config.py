"""Build a :class:`SinkRegistry` from a routing file.

Purpose
-------
Let operators move severity routing out of code into a small TOML, JSON or
YAML file::

    [sinks]
    error = ["stderr", "/var/log/app/errors.log"]
    info = "stdout"

Contents
--------
* :data:`STREAM_ALIASES` – names that resolve to the process streams.
* :func:`load_sink_registry` – load, validate and build the registry.
* :func:`resolve_sink_names` – map alias names to streams, leave paths alone.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Final, Mapping

from ..adapters.file_loaders.structured import FILE_LOADERS
from ..domain.errors import InvalidFormat
from ..observability import log_info
from .ports import SinkProvider
from .registry import SinkRegistry

STREAM_ALIASES: Final[dict[str, Callable[[], Any]]] = {
    "stderr": lambda: sys.stderr,
    "stdout": lambda: sys.stdout,
}
"""Alias names resolved lazily so redirected process streams are honoured."""


def load_sink_registry(path: str | Path, *, provider: SinkProvider | None = None) -> SinkRegistry:
    """Read the routing file at *path* and return a validated registry.

    Raises
    ------
    NotFound
        When the file does not exist.
    InvalidFormat
        When the suffix is unsupported, the file cannot be parsed, or the
        ``sinks`` table is missing or malformed.
    InvalidSinkTypeError
        When a resolved sink cannot be validated.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> routing = Path(tmp.name) / "routing.json"
    >>> _ = routing.write_text('{"sinks": {"error": "stderr"}}', encoding="utf-8")
    >>> registry = load_sink_registry(routing)
    >>> list(registry)
    ['error']
    >>> tmp.cleanup()
    """

    location = str(path)
    loader = FILE_LOADERS.get(Path(location).suffix.lower())
    if loader is None:
        raise InvalidFormat(f"Unsupported routing file type: {location}")
    document = loader.load(location)
    table = document.get("sinks")
    if not isinstance(table, Mapping):
        raise InvalidFormat(f"Routing file {location} must contain a 'sinks' table")
    routes = {str(level): resolve_sink_names(value, path=location) for level, value in table.items()}
    registry = SinkRegistry.from_mapping(routes, provider=provider)
    log_info("routing_loaded", path=location, levels=sorted(registry))
    return registry


def resolve_sink_names(value: object, *, path: str = "<memory>") -> Any:
    """Replace stream aliases in *value* (a string or list of strings).

    Examples
    --------
    >>> resolve_sink_names("stderr") is sys.stderr
    True
    >>> resolve_sink_names(["/tmp/errors.log"])
    ['/tmp/errors.log']
    """

    if isinstance(value, str):
        alias = STREAM_ALIASES.get(value.strip().lower())
        return alias() if alias is not None else value
    if isinstance(value, list):
        return [resolve_sink_names(item, path=path) for item in value]
    raise InvalidFormat(f"Routing file {path}: sink entries must be strings or lists of strings, got {value!r}")


__all__ = ["STREAM_ALIASES", "load_sink_registry", "resolve_sink_names"]
