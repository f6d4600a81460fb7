from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from .primitives import ABSENT, FieldError
from .types import Invalid, Issue, IssueCode, Valid, Validation

T = TypeVar("T")

# Typing:
# Check takes a value and returns it (possibly narrowed), or raises `FieldError`.
# Builder turns the flat `{path: value}` of a valid candidate into a record.
Check = Callable[[Any], Any]
Builder = Callable[[Mapping[str, Any]], T]


def get_nested(candidate: Mapping[str, Any], path: str) -> Any:
    """Read a dotted `path` from a nested candidate. `ABSENT` when any segment is missing."""
    current: Any = candidate
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return ABSENT
        current = current[segment]
    return current


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Any given field's configurable expectations."""
    path: str                       # dotted field path in the candidate object.
    type_check: Check               # first check, a failure skips the rest.
    checks: tuple[Check, ...] = ()  # range/shape checks, every failure is reported.
    required: bool = True           # whether or not this field's value must exist.
    default: Any = ABSENT           # used for optional fields left absent.


@dataclass(frozen=True)
class RowSchema(Generic[T]):
    """
    Structural checker for one candidate object.

    Unlike a fail-fast parser every field is visited, so `Invalid.issues` lists
    every violated constraint in field declaration order:
    - a missing required field gives one `missing_required` issue,
    - a wrongly typed field gives one `invalid_type` issue,
    - otherwise each failing range/shape check gives its own issue.
    """
    fields: Sequence[FieldSpec]
    build: Builder[T]

    def validate(self, candidate: Mapping[str, Any]) -> Validation:
        values: dict[str, Any] = {}
        issues: list[Issue] = []

        for f in self.fields:
            v = get_nested(candidate, f.path)

            if v is ABSENT:
                if f.required:
                    issues.append(Issue(f.path, "Required", IssueCode.missing_required))
                elif f.default is not ABSENT:
                    values[f.path] = f.default
                continue

            try:
                v = f.type_check(v)
            except FieldError as e:
                issues.append(Issue(f.path, e.detail, e.code))
                continue

            for check in f.checks:
                try:
                    v = check(v)
                except FieldError as e:
                    issues.append(Issue(f.path, e.detail, e.code))

            values[f.path] = v

        if issues:
            return Invalid(tuple(issues))
        return Valid(self.build(values))
