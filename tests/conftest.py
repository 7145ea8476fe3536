"""Shared fixtures for the lib_cant_errors test suite."""

from __future__ import annotations

from typing import Iterator

import pytest

from lib_cant_errors.observability import bind_trace_id
from lib_cant_errors.testing import RecordingSink


@pytest.fixture()
def sink() -> RecordingSink:
    """Fresh in-memory sink so each test inspects only its own records."""

    return RecordingSink()


@pytest.fixture(autouse=True)
def _clear_trace_id() -> Iterator[None]:
    """Keep trace identifiers from leaking between tests."""

    bind_trace_id(None)
    yield
    bind_trace_id(None)
