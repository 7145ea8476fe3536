"""Testing helpers that keep log output and failure paths observable.

Purpose
    Provide an in-memory sink for asserting on log records, and an
    intentionally failing helper that exercises error-handling paths in the
    CLI and integration suites.

Contents
    - ``RecordingSink``: collects written payloads and exposes parsed records.
    - ``FailureDemoError``: a kind built with this library.
    - ``FAILURE_MESSAGE``: stable message carried by ``FailureDemoError``.
    - ``i_should_fail``: raises ``FailureDemoError``.

System Integration
    Used by the test suite and by the CLI ``fail`` command.
"""

from __future__ import annotations

import json
from typing import Any, Final

from .application.factory import cant


class RecordingSink:
    """Sink that keeps every payload in memory.

    Examples
    --------
    >>> sink = RecordingSink()
    >>> _ = sink.write('{"message": "hi"}\\n')
    >>> sink.records
    [{'message': 'hi'}]
    """

    def __init__(self) -> None:
        self.payloads: list[str] = []

    def write(self, payload: str | bytes) -> int:
        text = payload.decode("utf-8") if isinstance(payload, bytes) else payload
        self.payloads.append(text)
        return len(text)

    @property
    def lines(self) -> list[str]:
        return [line for payload in self.payloads for line in payload.splitlines() if line]

    @property
    def records(self) -> list[dict[str, Any]]:
        return [json.loads(line) for line in self.lines]


FailureDemoError = (
    cant("complete the requested operation")
    .set_because_template("i should fail")
    .set_name("FailureDemoError")
    .set_severity_level("error")
    .set_http_status(500)
    .finalize()
)

FAILURE_MESSAGE: Final[str] = "Can't complete the requested operation because i should fail"
"""Stable message of :data:`FailureDemoError`; tests assert on the exact wording."""


def i_should_fail() -> None:
    """Raise :data:`FailureDemoError` for failure-path testing.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    lib_cant_errors.application.kind.FailureDemoError: Can't complete the requested operation because i should fail
    """

    raise FailureDemoError()
