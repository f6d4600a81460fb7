from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from warehouse_import.parsing.primitives import (
    check_bool,
    check_integer,
    check_min,
    check_non_empty,
    check_nonnegative,
    check_number,
    check_positive,
    check_text,
)
from warehouse_import.parsing.schema import FieldSpec, RowSchema
from warehouse_import.parsing.types import Dimensions


@dataclass(frozen=True, slots=True)
class RackRow:
    """A validated rack definition row."""
    symbol: str
    rows: int
    cols: int
    min_temp: float
    max_temp: float
    max_weight_kg: float
    max_item_size: Dimensions
    name: str | None = None
    is_dangerous: bool = False
    comment: str | None = None

    def to_mapping(self) -> Mapping[str, Any]:
        """Nested camelCase mapping, same shape as the candidate object."""
        out: dict[str, Any] = {
            "symbol": self.symbol,
            "rows": self.rows,
            "cols": self.cols,
            "minTemp": self.min_temp,
            "maxTemp": self.max_temp,
            "maxWeightKg": self.max_weight_kg,
            "maxItemSize": self.max_item_size.to_mapping(),
            "isDangerous": self.is_dangerous,
        }
        if self.name is not None:
            out["name"] = self.name
        if self.comment is not None:
            out["comment"] = self.comment
        return out


# Normalized header keys (lower case, no whitespace) -> field path.
RACK_HEADER_MAP: Mapping[str, str] = MappingProxyType({
    "symbol": "symbol",
    "marker": "symbol",
    "name": "name",
    "rows": "rows",
    "cols": "cols",
    "mintemp": "minTemp",
    "maxtemp": "maxTemp",
    "maxweightkg": "maxWeightKg",
    "maxweight": "maxWeightKg",     # older exports
    "maxitemwidth": "maxItemSize.width",
    "maxitemheight": "maxItemSize.height",
    "maxitemdepth": "maxItemSize.depth",
    "isdangerous": "isDangerous",
    "comment": "comment",
})


def _build_rack(v: Mapping[str, Any]) -> RackRow:
    return RackRow(
        symbol=v["symbol"],
        rows=v["rows"],
        cols=v["cols"],
        min_temp=v["minTemp"],
        max_temp=v["maxTemp"],
        max_weight_kg=v["maxWeightKg"],
        max_item_size=Dimensions(
            width=v["maxItemSize.width"],
            height=v["maxItemSize.height"],
            depth=v["maxItemSize.depth"],
        ),
        name=v.get("name"),
        is_dangerous=v["isDangerous"],
        comment=v.get("comment"),
    )


rack_schema: RowSchema[RackRow] = RowSchema(
    build=_build_rack,
    fields=[
        FieldSpec("symbol", check_text, (check_non_empty,)),
        FieldSpec("name", check_text, required=False),
        FieldSpec("rows", check_number, (check_integer, check_min(1))),
        FieldSpec("cols", check_number, (check_integer, check_min(1))),
        FieldSpec("minTemp", check_number),
        FieldSpec("maxTemp", check_number),
        FieldSpec("maxWeightKg", check_number, (check_nonnegative,)),
        FieldSpec("maxItemSize.width", check_number, (check_positive,)),
        FieldSpec("maxItemSize.height", check_number, (check_positive,)),
        FieldSpec("maxItemSize.depth", check_number, (check_positive,)),
        FieldSpec("isDangerous", check_bool, required=False, default=False),
        FieldSpec("comment", check_text, required=False),
    ],
)
