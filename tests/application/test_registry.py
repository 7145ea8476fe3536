"""Severity routing and bulk definition of kinds."""

from __future__ import annotations

import io
import sys

import pytest

from lib_cant_errors import EMPTY_REGISTRY, InvalidSinkTypeError, SinkRegistry, cant, define_errors
from lib_cant_errors.testing import RecordingSink


def test_from_mapping_normalises_values_to_tuples() -> None:
    info, first, second = RecordingSink(), RecordingSink(), RecordingSink()
    registry = SinkRegistry.from_mapping({"info": info, "error": [first, second]})
    assert registry["info"] == (info,)
    assert registry.route("error") == (first, second)
    assert registry.route("debug") is None
    assert registry.route(None) is None
    assert set(registry) == {"info", "error"}
    assert len(registry) == 2


def test_from_mapping_rejects_invalid_sinks() -> None:
    with pytest.raises(InvalidSinkTypeError):
        SinkRegistry.from_mapping({"error": [io.StringIO(), 123]})


def test_registry_is_read_only() -> None:
    registry = SinkRegistry.from_mapping({"info": RecordingSink()})
    with pytest.raises(TypeError):
        registry._routes["error"] = ()  # type: ignore[index]


def test_empty_registry_routes_nothing() -> None:
    assert len(EMPTY_REGISTRY) == 0
    assert EMPTY_REGISTRY.route("error") is None


def test_define_errors_names_and_finalises() -> None:
    errors = define_errors(
        {
            "DBUsernameError": cant("access the %s database").set_because_template("the username %s isn't valid"),
            "DBPasswordError": cant("access the %s database").set_because_template("that password isn't valid"),
        }
    )
    assert set(errors) == {"DBUsernameError", "DBPasswordError"}
    err = errors["DBUsernameError"]("production", "root")
    assert err.name == "DBUsernameError"
    assert err.message == "Can't access the production database because the username root isn't valid"
    assert errors["DBPasswordError"]("main").message == "Can't access the main database because that password isn't valid"


def test_define_errors_routes_by_severity() -> None:
    error_sink, extra_sink, own_sink = RecordingSink(), RecordingSink(), RecordingSink()
    registry = SinkRegistry.from_mapping({"error": [error_sink, extra_sink]})
    errors = define_errors(
        {
            "DBSaveError": cant("save %s to database").set_because_template("something happened").set_severity_level(
                "error"
            ),
            "CacheMissError": cant("read %s").set_because_template("it expired").set_severity_level("info").set_sinks(
                own_sink
            ),
            "SilentError": cant("do it").set_because_template("no level"),
        },
        registry,
    )

    errors["DBSaveError"]("report").log()
    errors["CacheMissError"]("key").log()

    assert errors["DBSaveError"].template.sinks == (error_sink, extra_sink)
    assert [record["message"] for record in error_sink.records] == ["Can't save report to database because something happened"]
    assert len(extra_sink.records) == 1
    assert errors["CacheMissError"].template.sinks == (own_sink,)
    assert own_sink.records[0]["level"] == "info"
    assert errors["SilentError"].template.sinks == (sys.stderr,)
