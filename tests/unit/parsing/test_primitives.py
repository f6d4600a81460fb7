from __future__ import annotations

import pytest

from warehouse_import.parsing.primitives import (
    ABSENT,
    FieldError,
    check_integer,
    check_min,
    check_number,
    check_positive,
    coerce_cell,
)
from warehouse_import.parsing.types import IssueCode


@pytest.mark.parametrize("cell", ["", "   ", "\t"])
def test_blank_cell_is_absent_for_every_field_type(cell: str) -> None:
    """Blank means "not given", never an error at this stage."""
    assert coerce_cell(cell, "weight") is ABSENT
    assert coerce_cell(cell, "isDangerous") is ABSENT
    assert coerce_cell(cell, "comment") is ABSENT


def test_decimal_comma_is_accepted() -> None:
    assert coerce_cell("12,5", "weight") == 12.5
    assert coerce_cell(" -3,25 ", "minTemp") == -3.25


def test_plain_numbers() -> None:
    assert coerce_cell("4", "rows") == 4.0
    assert coerce_cell("0.75", "dimensions.width") == 0.75


@pytest.mark.parametrize("cell", ["abc", "kg12", "-", ".", "nan", "inf"])
def test_malformed_number_is_absent(cell: str) -> None:
    assert coerce_cell(cell, "weight") is ABSENT


@pytest.mark.parametrize(
    "cell, expected",
    [("12kg", 12.0), ("1 000", 1.0), ("1,2,3", 1.2), ("5e2 g", 500.0), (".5m", 0.5)],
)
def test_leading_number_wins_over_trailing_text(cell: str, expected: float) -> None:
    """Like a lenient float parse: the number at the start is kept, the rest is ignored."""
    assert coerce_cell(cell, "weight") == expected


@pytest.mark.parametrize("cell", ["tak", "TRUE", "1", "yes", "t", "Y"])
def test_true_synonyms(cell: str) -> None:
    assert coerce_cell(cell, "isDangerous") is True


@pytest.mark.parametrize("cell", ["nie", "0", "no", "False", "f", "N"])
def test_false_synonyms(cell: str) -> None:
    assert coerce_cell(cell, "isDangerous") is False


def test_unknown_boolean_is_absent() -> None:
    assert coerce_cell("maybe", "isDangerous") is ABSENT


def test_string_fields_are_trimmed_not_converted() -> None:
    """`name` is neither numeric nor boolean, so `"1"` stays text."""
    assert coerce_cell("  1 ", "name") == "1"
    assert coerce_cell(" Rack A ", "comment") == "Rack A"


def test_absent_is_falsy_singleton() -> None:
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"


def test_checks_raise_field_error_with_code() -> None:
    with pytest.raises(FieldError) as e:
        check_number("4")
    assert e.value.code == IssueCode.invalid_type

    with pytest.raises(FieldError) as e:
        check_number(True)
    assert e.value.detail == "Expected number, received boolean"

    with pytest.raises(FieldError) as e:
        check_integer(2.5)
    assert e.value.code == IssueCode.not_integer

    with pytest.raises(FieldError) as e:
        check_min(1)(0)
    assert e.value.detail == "Number must be greater than or equal to 1"

    with pytest.raises(FieldError) as e:
        check_positive(0)
    assert e.value.code == IssueCode.too_small


def test_check_integer_narrows_float() -> None:
    v = check_integer(6.0)
    assert v == 6 and isinstance(v, int)
