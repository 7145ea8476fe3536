from __future__ import annotations

from lib_cant_errors.domain.errors import CantConfigError, InvalidFormat, InvalidSinkTypeError, NotFound


def test_error_hierarchy() -> None:
    assert issubclass(InvalidFormat, CantConfigError)
    assert issubclass(NotFound, CantConfigError)
    assert issubclass(InvalidSinkTypeError, CantConfigError)
    assert issubclass(InvalidSinkTypeError, TypeError)
    for exception in (InvalidFormat(""), NotFound(""), InvalidSinkTypeError(object())):
        assert isinstance(exception, CantConfigError)


def test_invalid_sink_type_error_describes_value_and_type() -> None:
    err = InvalidSinkTypeError({"i": "am not a stream"})
    assert err.value == {"i": "am not a stream"}
    assert err.observed_type == "dict"
    assert "{'i': 'am not a stream'}" in str(err)
    assert "(dict given)" in str(err)
