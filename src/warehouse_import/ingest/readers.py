from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from warehouse_import.parsing.headers import normalize_header, normalize_header_key
from warehouse_import.parsing.types import ParseError, RawRow


DEFAULT_DELIMITER = ";"
COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class CsvTable:
    """Tokenized CSV: display headers, raw rows and tokenizer-level errors."""
    headers: list[str]
    rows: list[RawRow]
    line_numbers: list[int]     # physical 1-based line each row in `rows` started on
    errors: list[ParseError]


def _dedupe_headers(headers: list[str]) -> list[str]:
    """
    Rename repeated headers `name`, `name_1`, `name_2`... so the first column keeps the name.

    Repeats are detected on the lookup key, so `name;Name` renames the second one
    to `Name_1` and the first column still wins the header map lookup.
    """
    used: set[str] = set()
    out: list[str] = []
    for h in headers:
        candidate, n = h, 0
        while normalize_header_key(candidate) in used:
            n += 1
            candidate = f"{h}_{n}"
        used.add(normalize_header_key(candidate))
        out.append(candidate)
    return out


def _is_empty_record(record: list[str]) -> bool:
    # csv yields `[]` for an empty line, a whitespace-only line is one blank cell.
    return not record or (len(record) == 1 and record[0].strip() == "")


def read_csv_text(
    text: str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    comment: str | None = COMMENT_PREFIX,
    skip_empty_lines: bool = True,
) -> CsvTable:
    """
    Tokenize delimited text, the first record being the header row.

    Problems with the structure of a line become `ParseError`s (with the physical
    line number) and tokenizing carries on with the next line:
    - broken quoting drops that record,
    - too few fields pads the row with `""`,
    - too many fields drops the extra cells.

    Lines starting with `comment` are skipped but still counted as lines. Only the
    first line of a record can be a comment, a `#` line inside a quoted cell is data.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    consumed: list[int] = []    # physical line numbers handed to the csv reader, in order
    at_record_start = True      # next line pulled by the reader begins a new record

    def _lines() -> Iterator[str]:
        nonlocal at_record_start
        # newline="" keeps `\r\n` inside quoted cells intact for the csv module.
        for lineno, line in enumerate(io.StringIO(text, newline=""), start=1):
            if at_record_start and comment and line.startswith(comment):
                continue
            consumed.append(lineno)
            at_record_start = False
            yield line

    reader = csv.reader(_lines(), delimiter=delimiter, strict=True)

    headers: list[str] | None = None
    rows: list[RawRow] = []
    line_numbers: list[int] = []
    errors: list[ParseError] = []

    while True:
        before = len(consumed)
        at_record_start = True
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            start = consumed[before] if before < len(consumed) else 0
            errors.append(ParseError(row=start, message=f"Malformed row: {e}"))
            continue

        start = consumed[before]

        if _is_empty_record(record):
            if skip_empty_lines or headers is None:
                continue
            record = [""] * len(headers)

        ## -- first record is the header row
        if headers is None:
            headers = _dedupe_headers([normalize_header(h) for h in record])
            continue

        width = len(headers)
        if len(record) < width:
            errors.append(ParseError(row=start, message=f"Too few fields: expected {width} fields but parsed {len(record)}"))
            record = record + [""] * (width - len(record))
        elif len(record) > width:
            errors.append(ParseError(row=start, message=f"Too many fields: expected {width} fields but parsed {len(record)}"))
            record = record[:width]

        rows.append(dict(zip(headers, record)))
        line_numbers.append(start)

    return CsvTable(headers=headers or [], rows=rows, line_numbers=line_numbers, errors=errors)


def read_csv_file(path: Path) -> str:
    """Whole-file read. A UTF-8 BOM is left in place, `read_csv_text` strips it."""
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()
