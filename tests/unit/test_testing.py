from __future__ import annotations

import pytest

from lib_cant_errors import CantError
from lib_cant_errors.testing import FAILURE_MESSAGE, FailureDemoError, RecordingSink, i_should_fail


def test_i_should_fail_raises_demo_error() -> None:
    with pytest.raises(FailureDemoError) as caught:
        i_should_fail()
    assert isinstance(caught.value, CantError)
    assert caught.value.message == FAILURE_MESSAGE
    assert (caught.value.level, caught.value.status) == ("error", 500)


def test_i_should_fail_reexported() -> None:
    from lib_cant_errors import i_should_fail as exported
    from lib_cant_errors.testing import i_should_fail as helper

    assert exported is helper


def test_recording_sink_accepts_bytes_and_splits_lines() -> None:
    sink = RecordingSink()
    sink.write(b'{"a": 1}\n{"a": 2}\n')
    sink.write('{"a": 3}\n')
    assert sink.lines == ['{"a": 1}', '{"a": 2}', '{"a": 3}']
    assert [record["a"] for record in sink.records] == [1, 2, 3]
