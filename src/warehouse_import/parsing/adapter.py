from __future__ import annotations

import logging
from typing import Any, Mapping

from warehouse_import.parsing.headers import normalize_header_key
from warehouse_import.parsing.primitives import ABSENT, coerce_cell

logger = logging.getLogger(__name__)


def set_nested(target: dict[str, Any], path: str, value: Any) -> None:
    """
    Write `value` at a dotted `path`, creating intermediate dicts as needed.

    Sibling keys already present under a shared prefix are kept, e.g. writing
    `dimensions.height` after `dimensions.width` merges into one `dimensions` dict.
    """
    *parents, leaf = path.split(".")
    current = target
    for segment in parents:
        nxt = current.get(segment)
        if not isinstance(nxt, dict):
            nxt = {}
            current[segment] = nxt
        current = nxt
    current[leaf] = value


def map_row(raw: Mapping[str, str], *, header_map: Mapping[str, str]) -> dict[str, Any]:
    """
    Turn a raw CSV row (header -> cell text) into a nested candidate object.

    - headers are matched case- and whitespace-insensitively against `header_map`,
    - unrecognized columns are skipped (extra metadata columns are allowed),
    - each cell is coerced for its target field, absent values are omitted
      rather than set to `None` so optional fields stay optional.
    """
    out: dict[str, Any] = {}

    for header, cell in raw.items():
        path = header_map.get(normalize_header_key(str(header)))
        if path is None:
            continue

        cell = "" if cell is None else str(cell)
        value = coerce_cell(cell, path)
        if value is ABSENT:
            if cell.strip():
                # garbled typed cell, surfaces later as a schema issue when the field is required
                logger.debug("dropping uncoercible value %r for %s (column %r)", cell, path, header)
            continue

        set_nested(out, path, value)

    return out
