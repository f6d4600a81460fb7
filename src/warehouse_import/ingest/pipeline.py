from __future__ import annotations

import logging
from typing import Any, Literal

from warehouse_import.ingest.readers import DEFAULT_DELIMITER, read_csv_text
from warehouse_import.parsing.adapter import map_row
from warehouse_import.parsing.registry import ImportProfile, get_import_profile
from warehouse_import.parsing.types import ImportKind, Invalid, ParseError, ParseResult, RawRow

logger = logging.getLogger(__name__)


# "logical": index among kept data rows + 2 (header is line 1).
# "physical": the line of the input text the row started on.
RowNumbering = Literal["logical", "physical"]


def is_blank_row(row: RawRow) -> bool:
    """Every cell is empty after trimming."""
    return all((v or "").strip() == "" for v in row.values())


def parse_csv(
    text: str,
    *,
    kind: ImportKind | str,
    delimiter: str = DEFAULT_DELIMITER,
    skip_empty_lines: bool = True,
    row_numbering: RowNumbering = "logical",
) -> ParseResult[Any]:
    """
    End-to-end CSV import check for racks or items:
      - Tokenize `text` (header row first, `#` comment lines skipped),
      - Drop rows where every cell is blank,
      - Map each row through the kind's header map and coerce its cells,
      - Validate each candidate against the kind's schema,
            - valid rows -> `rows`,
            - invalid rows -> one `ParseError` per issue, `"<path>: <message>"`,
      - Return everything, tokenizer errors first.

    Does not raise on bad data, only on an unknown `kind` (a caller bug).
    """
    # resolve once, before touching the data.
    profile: ImportProfile = get_import_profile(kind)

    if row_numbering not in ("logical", "physical"):
        raise ValueError(f"Unknown row_numbering: {row_numbering}")

    table = read_csv_text(text, delimiter=delimiter, skip_empty_lines=skip_empty_lines)

    kept = [(row, line) for row, line in zip(table.rows, table.line_numbers) if not is_blank_row(row)]

    rows: list[Any] = []
    raw_rows: list[RawRow] = [row for row, _ in kept]
    errors: list[ParseError] = list(table.errors)

    for index, (raw, line) in enumerate(kept):
        row_number = index + 2 if row_numbering == "logical" else line

        candidate = map_row(raw, header_map=profile.header_map)
        res = profile.schema.validate(candidate)

        if isinstance(res, Invalid):
            for issue in res.issues:
                errors.append(ParseError(row=row_number, message=f"{issue.path}: {issue.message}"))
            continue

        rows.append(res.value)

    logger.info(
        "%s import: %d rows, %d valid, %d errors (%d from tokenizer)",
        profile.kind.value, len(raw_rows), len(rows), len(errors), len(table.errors),
    )

    return ParseResult(headers=table.headers, rows=rows, raw_rows=raw_rows, errors=errors)
