from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .schema import RowSchema
from .types import ImportKind, Validation


@dataclass(frozen=True)
class ImportProfile:
    """Everything kind-specific an import needs: its header vocabulary and its schema."""
    kind: ImportKind
    header_map: Mapping[str, str]
    schema: RowSchema[Any]


def get_import_profile(kind: ImportKind | str) -> ImportProfile:
    """
    A registry that assigns an import kind its header map and schema.

    Raises `ValueError` on an unknown kind, this is a caller bug not a data problem.
    """
    kind = ImportKind(kind)     # raises ValueError for unknown strings

    if kind is ImportKind.rack:
        from .profiles.racks import RACK_HEADER_MAP, rack_schema
        return ImportProfile(kind=kind, header_map=RACK_HEADER_MAP, schema=rack_schema)

    if kind is ImportKind.item:
        from .profiles.items import ITEM_HEADER_MAP, item_schema
        return ImportProfile(kind=kind, header_map=ITEM_HEADER_MAP, schema=item_schema)

    raise ValueError(f"Unknown import kind: {kind}")


def validate(candidate: Mapping[str, Any], kind: ImportKind | str) -> Validation:
    """Run one candidate object through the schema of `kind`."""
    return get_import_profile(kind).schema.validate(candidate)
