from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from warehouse_import.parsing.primitives import (
    check_bool,
    check_integer,
    check_non_empty,
    check_nonnegative,
    check_number,
    check_positive,
    check_text,
)
from warehouse_import.parsing.schema import FieldSpec, RowSchema
from warehouse_import.parsing.types import Dimensions


@dataclass(frozen=True, slots=True)
class ItemRow:
    """A validated inventory item definition row."""
    name: str
    min_temp: float
    max_temp: float
    weight: float
    dimensions: Dimensions
    id: str | None = None
    image_url: str | None = None
    days_to_expiry: int | None = None
    is_dangerous: bool = False
    comment: str | None = None

    def to_mapping(self) -> Mapping[str, Any]:
        """Nested camelCase mapping, same shape as the candidate object."""
        out: dict[str, Any] = {
            "name": self.name,
            "minTemp": self.min_temp,
            "maxTemp": self.max_temp,
            "weight": self.weight,
            "dimensions": self.dimensions.to_mapping(),
            "isDangerous": self.is_dangerous,
        }
        # optional fields only when present
        for key, value in (
            ("id", self.id),
            ("imageUrl", self.image_url),
            ("daysToExpiry", self.days_to_expiry),
            ("comment", self.comment),
        ):
            if value is not None:
                out[key] = value
        return out


# Normalized header keys (lower case, no whitespace) -> field path.
ITEM_HEADER_MAP: Mapping[str, str] = MappingProxyType({
    "id": "id",
    "name": "name",
    "imageurl": "imageUrl",
    "mintemp": "minTemp",
    "maxtemp": "maxTemp",
    "weight": "weight",
    "width": "dimensions.width",
    "height": "dimensions.height",
    "depth": "dimensions.depth",
    "daystoexpiry": "daysToExpiry",
    "isdangerous": "isDangerous",
    "comment": "comment",
})


def _build_item(v: Mapping[str, Any]) -> ItemRow:
    return ItemRow(
        name=v["name"],
        min_temp=v["minTemp"],
        max_temp=v["maxTemp"],
        weight=v["weight"],
        dimensions=Dimensions(
            width=v["dimensions.width"],
            height=v["dimensions.height"],
            depth=v["dimensions.depth"],
        ),
        id=v.get("id"),
        image_url=v.get("imageUrl"),
        days_to_expiry=v.get("daysToExpiry"),
        is_dangerous=v["isDangerous"],
        comment=v.get("comment"),
    )


item_schema: RowSchema[ItemRow] = RowSchema(
    build=_build_item,
    fields=[
        FieldSpec("name", check_text, (check_non_empty,)),
        FieldSpec("id", check_text, required=False),
        FieldSpec("imageUrl", check_text, required=False),
        FieldSpec("minTemp", check_number),
        FieldSpec("maxTemp", check_number),
        FieldSpec("weight", check_number, (check_nonnegative,)),
        FieldSpec("dimensions.width", check_number, (check_positive,)),
        FieldSpec("dimensions.height", check_number, (check_positive,)),
        FieldSpec("dimensions.depth", check_number, (check_positive,)),
        FieldSpec("daysToExpiry", check_number, (check_integer, check_nonnegative), required=False),
        FieldSpec("isDangerous", check_bool, required=False, default=False),
        FieldSpec("comment", check_text, required=False),
    ],
)
