from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar, Union


# one parsed CSV line: header -> cell text, column order preserved.
RawRow = dict[str, str]

T = TypeVar("T")


class ImportKind(str, Enum):
    """What a CSV file describes. Selects the header map and the schema."""
    rack = "rack"
    item = "item"


class IssueCode(str, Enum):
    """Typed issue classifications."""
    missing_required = "missing_required"
    invalid_type = "invalid_type"
    too_small = "too_small"
    not_integer = "not_integer"
    empty_text = "empty_text"


@dataclass(frozen=True, slots=True)
class Issue:
    """One violated constraint on one field of a candidate object."""
    path: str               # dotted field path, e.g. `maxItemSize.width`
    message: str
    code: IssueCode


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Candidate passed its schema."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    """Candidate failed its schema, every issue is listed (not only the first)."""
    issues: tuple[Issue, ...]

    @property
    def ok(self) -> bool:
        return False


Validation = Union[Valid[Any], Invalid]


@dataclass(frozen=True, slots=True)
class Dimensions:
    """Width/height/depth of an item, or the largest item a rack slot fits."""
    width: float
    height: float
    depth: float

    def to_mapping(self) -> Mapping[str, Any]:
        return {"width": self.width, "height": self.height, "depth": self.depth}


@dataclass(frozen=True, slots=True)
class ParseError:
    """
    A row-attributed problem, either from the tokenizer or from the schema.

    `row` is 1-based with the header on line 1, so the first data row is 2.
    Tokenizer errors that can't be placed use `0`.
    """
    row: int
    message: str

    def to_mapping(self) -> Mapping[str, Any]:
        return {"row": self.row, "message": self.message}


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Everything one `parse_csv` call produced. Owned by the caller."""
    headers: list[str]
    rows: list[T]
    raw_rows: list[RawRow]
    errors: list[ParseError]

    def to_mapping(self) -> Mapping[str, Any]:
        """JSON-ready shape of the result (validated rows in camelCase)."""
        return {
            "headers": list(self.headers),
            "rows": [r.to_mapping() if hasattr(r, "to_mapping") else r for r in self.rows],
            "rawRows": [dict(r) for r in self.raw_rows],
            "errors": [e.to_mapping() for e in self.errors],
        }
