"""Default sink provider: recognise writable destinations and open path sinks.

Purpose
-------
Turn whatever a caller passes to ``set_sinks`` (a stream, a socket, a file
path, or a list of those) into objects the ``log`` routine can write to, and
reject everything else early with :class:`InvalidSinkTypeError`.

Contents
--------
* :class:`DefaultSinkProvider` – implementation of
  :class:`lib_cant_errors.application.ports.SinkProvider`.
* :func:`validate_sinks` – module-level shortcut using a shared provider.
* :func:`write_payload` – writes one text payload to one sink.

System Role
-----------
Invoked by :class:`lib_cant_errors.application.factory.ErrorFactory` and by
:class:`lib_cant_errors.application.registry.SinkRegistry`.
"""

from __future__ import annotations

import io
import os
import socket
from pathlib import Path
from typing import Any

from ...application.ports import Sink
from ...domain.errors import InvalidSinkTypeError
from ...observability import log_debug, log_error


class DefaultSinkProvider:
    """Recognise streams, sockets, TTYs and paths; open paths for appending.

    Why
    ----
    Log files are usually shared between restarts, so path sinks are opened in
    append mode with line buffering; every record ends in a newline and
    therefore reaches the file on write.

    Examples
    --------
    >>> buffer = io.StringIO()
    >>> DefaultSinkProvider().validate(buffer) is buffer
    True
    >>> DefaultSinkProvider().validate({"i": "am not a stream"})
    Traceback (most recent call last):
    ...
    lib_cant_errors.domain.errors.InvalidSinkTypeError: Can't validate sink because {'i': 'am not a stream'} must be a writable stream, socket or path string (dict given)
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def validate(self, value: Any) -> Any:
        """Return *value* as a sink, or a list of sinks for list/tuple input."""

        if isinstance(value, (list, tuple)):
            return [self.validate(item) for item in value]
        if isinstance(value, socket.socket):
            return value
        if isinstance(value, io.IOBase):
            if value.closed or not value.writable():
                return self._reject(value)
            return value
        if isinstance(value, (str, os.PathLike)):
            return self._open(value)
        if isinstance(value, Sink):
            return value
        return self._reject(value)

    def _open(self, path: str | os.PathLike[str]) -> io.TextIOWrapper:
        target = Path(path)
        stream = target.open("a", encoding=self._encoding, buffering=1)
        log_debug("sink_opened", path=str(target))
        return stream

    @staticmethod
    def _reject(value: Any) -> Any:
        log_error("sink_rejected", observed_type=type(value).__name__)
        raise InvalidSinkTypeError(value)


_DEFAULT_PROVIDER = DefaultSinkProvider()


def validate_sinks(value: Any) -> Any:
    """Validate *value* with the shared :class:`DefaultSinkProvider`."""

    return _DEFAULT_PROVIDER.validate(value)


def write_payload(sink: Any, payload: str) -> None:
    """Write a text *payload* to *sink* in the form the sink accepts.

    Sockets and binary streams receive UTF-8 bytes with ``\\n`` translated to
    :data:`os.linesep`; text sinks receive the text and translate newlines
    themselves. The sink is not flushed.

    Examples
    --------
    >>> raw = io.BytesIO()
    >>> write_payload(raw, "ok\\n")
    >>> raw.getvalue() == ("ok" + os.linesep).encode()
    True
    """

    if isinstance(sink, socket.socket):
        sink.sendall(_as_bytes(payload))
    elif isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
        sink.write(_as_bytes(payload))
    else:
        sink.write(payload)


def _as_bytes(payload: str) -> bytes:
    return payload.replace("\n", os.linesep).encode("utf-8")


__all__ = ["DefaultSinkProvider", "validate_sinks", "write_payload"]
