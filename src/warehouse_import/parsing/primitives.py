from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from .types import IssueCode


@dataclass(frozen=True, slots=True)
class FieldError(Exception):
    """A single failed check on a field, with details for the issue message."""
    code: IssueCode             # classifies the issue
    detail: str                 # human-readable message, without the field path


class _Absent:
    """Marker for "no value": blank or uncoercible cells. Never written into a candidate."""
    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


## -- field type classification, shared by both import kinds

NUMERIC_FIELDS: frozenset[str] = frozenset({
    "rows",
    "cols",
    "minTemp",
    "maxTemp",
    "maxWeightKg",
    "maxItemSize.width",
    "maxItemSize.height",
    "maxItemSize.depth",
    "weight",
    "dimensions.width",
    "dimensions.height",
    "dimensions.depth",
    "daysToExpiry",
})

BOOLEAN_FIELDS: frozenset[str] = frozenset({"isDangerous"})

# accepted boolean synonyms, Polish `tak`/`nie` included.
_TRUE_STRINGS = frozenset({"true", "1", "tak", "yes", "t", "y"})
_FALSE_STRINGS = frozenset({"false", "0", "nie", "no", "f", "n"})


# leading decimal number, trailing text is ignored (`"12kg"` -> 12).
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(s: str) -> Any:
    """
    Parse the leading decimal number of `s`, accepting a decimal comma (`"12,5"` -> `12.5`).

    Anything after the number is ignored, so `"12kg"` -> `12.0` and `"1 000"` -> `1.0`.
    Returns `ABSENT` when `s` does not start with a number or the number overflows.
    """
    m = _LEADING_NUMBER.match(s.strip().replace(",", ".", 1))
    if m is None:
        return ABSENT
    n = float(m.group(0))
    return n if math.isfinite(n) else ABSENT


def parse_bool(s: str) -> Any:
    """Map a boolean synonym to `True`/`False`, or `ABSENT` when not recognized."""
    s = s.lower()
    if s in _TRUE_STRINGS:
        return True
    if s in _FALSE_STRINGS:
        return False
    return ABSENT


def coerce_cell(
    value: str,
    field: str,
    *,
    numeric_fields: frozenset[str] = NUMERIC_FIELDS,
    boolean_fields: frozenset[str] = BOOLEAN_FIELDS,
) -> Any:
    """
    Convert a raw cell into the typed value for `field`.

    - blank cell -> `ABSENT` (the schema decides whether the field is required),
    - numeric field -> `float`, or `ABSENT` when malformed,
    - boolean field -> `bool`, or `ABSENT` when not a known synonym,
    - anything else -> the trimmed string.

    Never raises.
    """
    s = value.strip()
    if s == "":
        return ABSENT
    if field in numeric_fields:
        return parse_number(s)
    if field in boolean_fields:
        return parse_bool(s)
    return s


## -- checks used by `FieldSpec`. Each returns the (possibly narrowed) value or raises `FieldError`.

def _type_name(v: Any) -> str:
    if isinstance(v, bool):
        return "boolean"
    if isinstance(v, (int, float)):
        return "number"
    if isinstance(v, str):
        return "string"
    if isinstance(v, dict):
        return "object"
    return type(v).__name__


def check_number(v: Any) -> float:
    # `bool` is an `int` subclass, reject it explicitly.
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise FieldError(IssueCode.invalid_type, f"Expected number, received {_type_name(v)}")
    return v


def check_integer(v: float) -> int:
    if not float(v).is_integer():
        raise FieldError(IssueCode.not_integer, "Expected integer, received float")
    return int(v)


def check_min(minimum: float):
    """Inclusive lower bound."""
    def _check(v: float) -> float:
        if v < minimum:
            bound = int(minimum) if float(minimum).is_integer() else minimum
            raise FieldError(IssueCode.too_small, f"Number must be greater than or equal to {bound}")
        return v
    return _check


def check_positive(v: float) -> float:
    if v <= 0:
        raise FieldError(IssueCode.too_small, "Number must be greater than 0")
    return v


check_nonnegative = check_min(0)


def check_text(v: Any) -> str:
    if not isinstance(v, str):
        raise FieldError(IssueCode.invalid_type, f"Expected string, received {_type_name(v)}")
    return v


def check_non_empty(v: str) -> str:
    if v.strip() == "":
        raise FieldError(IssueCode.empty_text, "String must contain at least 1 character(s)")
    return v


def check_bool(v: Any) -> bool:
    if not isinstance(v, bool):
        raise FieldError(IssueCode.invalid_type, f"Expected boolean, received {_type_name(v)}")
    return v
