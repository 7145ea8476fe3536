from __future__ import annotations

import numbers
from decimal import Decimal
from fractions import Fraction

from hypothesis import given
from hypothesis import strategies as st

from lib_cant_errors.domain.formatting import compose_message, count_placeholders, format_template

MARKER = st.sampled_from(["%s", "%d", "%j"])
FILLER = st.text(alphabet=st.characters(exclude_characters="%", exclude_categories=("Cs",)), max_size=6)


def test_count_placeholders_counts_each_marker_kind() -> None:
    assert count_placeholders("access the %s database as %d with %j") == 3


def test_count_placeholders_empty_and_plain() -> None:
    assert count_placeholders("") == 0
    assert count_placeholders("nothing to see here") == 0
    assert count_placeholders("100% sure, %x is not a marker") == 0


def test_count_placeholders_does_not_double_count_adjacent_markers() -> None:
    assert count_placeholders("%s%s") == 2
    assert count_placeholders("%%s") == 1
    assert count_placeholders("%%%s") == 1


@given(st.lists(st.tuples(FILLER, MARKER), max_size=8), FILLER)
def test_count_matches_number_of_inserted_markers(pieces, tail) -> None:
    template = "".join(filler + marker for filler, marker in pieces) + tail
    assert count_placeholders(template) == len(pieces)


def test_string_marker_uses_str() -> None:
    assert format_template("value %s", [{"one": 1}]) == "value {'one': 1}"
    assert format_template("value %s", [1]) == "value 1"


def test_number_marker_coerces_or_renders_nan() -> None:
    assert format_template("%d", [42]) == "42"
    assert format_template("%d", ["12"]) == "12"
    assert format_template("%d", [" 7 "]) == "7"
    assert format_template("%d", ["1.5"]) == "1.5"
    assert format_template("%d", [2.0]) == "2"
    assert format_template("%d", ["0x10"]) == "16"
    assert format_template("%d", [True]) == "1"
    assert format_template("%d", [None]) == "0"
    assert format_template("%d", [""]) == "0"
    assert format_template("%d", ["one"]) == "NaN"
    assert format_template("%d", [{"one": 1}]) == "NaN"
    assert format_template("%d", ["-Infinity"]) == "-Infinity"
    assert format_template("%d", [Decimal("1.5")]) == "1.5"
    assert format_template("%d", [Decimal("NaN")]) == "NaN"
    assert format_template("%d", [Fraction(3, 1)]) == "3"
    assert format_template("%d", [Fraction(1, 4)]) == "0.25"
    assert format_template("%d", [complex(1, 2)]) == "NaN"
    assert format_template("%d", [b"12"]) == "NaN"


def test_number_marker_keeps_large_integrals_exact() -> None:
    class Counter:
        def __init__(self, value: int) -> None:
            self.value = value

        def __index__(self) -> int:
            return self.value

        def __float__(self) -> float:
            return float(self.value)

    numbers.Integral.register(Counter)
    assert format_template("%d", [Counter(2**64 + 1)]) == str(2**64 + 1)
    assert format_template("%d", [2**64 + 1]) == str(2**64 + 1)


def test_json_marker_serialises_compactly() -> None:
    assert format_template("%j", [{"one": 1}]) == '{"one":1}'
    assert format_template("%j", ["one"]) == '"one"'
    assert format_template("%j", [1]) == "1"
    assert format_template("%j", [[1, "ü"]]) == '[1,"ü"]'


def test_json_marker_handles_circular_structures() -> None:
    looping: list[object] = []
    looping.append(looping)
    assert format_template("%j", [looping]) == "[Circular]"


def test_double_percent_is_literal_and_consumes_nothing() -> None:
    assert format_template("100%% of %s", ["tests"]) == "100% of tests"


def test_missing_arguments_leave_markers_literal() -> None:
    assert format_template("%s and %d", ["one"]) == "one and %d"


def test_surplus_arguments_are_appended() -> None:
    assert format_template("%%s", ["one", 2]) == "%s one 2"


def test_compose_message_trims_and_collapses_whitespace() -> None:
    assert compose_message("do   thing\t", " reason\n") == "Can't do thing because reason"
    assert compose_message("", "") == "Can't because"
