"""JSON log records written by ``CantError.log``."""

from __future__ import annotations

import io
import json
import socket
from datetime import datetime
from pathlib import Path

import pytest

from lib_cant_errors import cant
from lib_cant_errors.testing import RecordingSink


def test_log_writes_one_json_line_without_stack(sink: RecordingSink) -> None:
    Kind = cant("do a thing").set_because_template("of a reason").set_sinks(sink).finalize()
    Kind().log()

    assert len(sink.payloads) == 1
    assert sink.payloads[0].endswith("\n")
    assert not sink.payloads[0].endswith("\r\n")
    record = sink.records[0]
    assert record["message"] == "Can't do a thing because of a reason"
    assert record["level"] is None
    assert record["status"] is None
    assert "stack" not in record
    assert list(record) == ["level", "status", "message", "date"]


def test_log_record_is_compact_json(sink: RecordingSink) -> None:
    Kind = cant("do a thing").set_because_template("of a reason").set_sinks(sink).finalize()
    Kind().log()
    assert ", " not in sink.payloads[0]
    assert '": ' not in sink.payloads[0]


def test_log_date_is_utc_iso_timestamp(sink: RecordingSink) -> None:
    Kind = cant("do a thing").set_because_template("of a reason").set_sinks(sink).finalize()
    Kind().log()
    stamp = sink.records[0]["date"]
    assert stamp.endswith("Z")
    parsed = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
    assert parsed.utcoffset() is not None and parsed.utcoffset().total_seconds() == 0


def test_log_carries_level_and_status(sink: RecordingSink) -> None:
    Kind = (
        cant("save %s")
        .set_because_template("the disk is full")
        .set_severity_level("error")
        .set_http_status(507)
        .set_sinks(sink)
        .finalize()
    )
    Kind("report.pdf").log()
    record = sink.records[0]
    assert (record["level"], record["status"]) == ("error", 507)


def test_log_writes_to_every_sink_in_order() -> None:
    first, second = RecordingSink(), RecordingSink()
    Kind = cant("do a thing").set_because_template("of a reason").set_sinks([first, second]).finalize()
    Kind().log()
    assert len(first.records) == 1
    assert len(second.records) == 1
    assert first.records[0]["message"] == second.records[0]["message"]


def test_log_includes_stack_when_requested(sink: RecordingSink) -> None:
    Kind = cant("do a thing").set_because_template("of a reason").set_sinks(sink).finalize()
    Kind().log(True)
    stack = sink.records[0]["stack"]
    assert isinstance(stack, str) and stack
    assert stack.startswith("Error: Can't do a thing because of a reason")


def test_log_to_text_and_binary_streams() -> None:
    text, raw = io.StringIO(), io.BytesIO()
    Kind = cant("do a thing").set_because_template("of a reason").set_sinks([text, raw]).finalize()
    Kind().log()
    assert json.loads(text.getvalue())["message"] == "Can't do a thing because of a reason"
    assert json.loads(raw.getvalue().decode("utf-8"))["message"] == "Can't do a thing because of a reason"


def test_log_to_socket() -> None:
    writer, reader = socket.socketpair()
    try:
        Kind = cant("do a thing").set_because_template("of a reason").set_sinks(writer).finalize()
        Kind().log()
        payload = reader.recv(65536).decode("utf-8")
    finally:
        writer.close()
        reader.close()
    assert json.loads(payload)["message"] == "Can't do a thing because of a reason"


def test_log_to_path_appends_lines(tmp_path: Path) -> None:
    target = tmp_path / "errors.log"
    Kind = cant("do %s").set_because_template("of a reason").set_sinks(str(target)).finalize()
    try:
        Kind("one").log()
        Kind("two").log()
    finally:
        for stream in Kind.template.sinks:
            stream.close()
    lines = target.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == [
        "Can't do one because of a reason",
        "Can't do two because of a reason",
    ]


def test_to_record_matches_logged_fields(sink: RecordingSink) -> None:
    Kind = cant("do a thing").set_because_template("of a reason").set_http_status(418).set_sinks(sink).finalize()
    err = Kind()
    record = err.to_record()
    assert record["status"] == 418
    assert "stack" not in record
    assert "stack" in err.to_record(include_stack=True)


class _BrokenSink:
    def write(self, payload: str) -> int:
        raise OSError("device unplugged")


def test_failing_sink_raises_and_stops_later_writes() -> None:
    later = RecordingSink()
    Kind = cant("do a thing").set_because_template("of a reason").set_sinks([_BrokenSink(), later]).finalize()
    with pytest.raises(OSError, match="device unplugged"):
        Kind().log()
    assert later.payloads == []
