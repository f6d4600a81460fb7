from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from uuid import UUID

from psycopg import Connection

from warehouse_import.db.error_writers import insert_import_errors
from warehouse_import.db.import_runs import finish_import_run, insert_import_run
from warehouse_import.ingest.pipeline import RowNumbering, parse_csv
from warehouse_import.ingest.readers import DEFAULT_DELIMITER, read_csv_file
from warehouse_import.ingest.summary import ImportSummary
from warehouse_import.parsing.types import ImportKind, ParseResult

logger = logging.getLogger(__name__)


def check_file(
    input_path: Path,
    *,
    kind: ImportKind | str,
    delimiter: str = DEFAULT_DELIMITER,
    skip_empty_lines: bool = True,
    row_numbering: RowNumbering = "logical",
) -> ParseResult[Any]:
    """Read a whole CSV file into memory and run it through `parse_csv`."""
    logger.debug("checking %s as %s", input_path, ImportKind(kind).value)
    text = read_csv_file(input_path)
    return parse_csv(
        text,
        kind=kind,
        delimiter=delimiter,
        skip_empty_lines=skip_empty_lines,
        row_numbering=row_numbering,
    )


def record_import(conn: Connection, *, input_path: Path, kind: ImportKind | str, result: ParseResult[Any]) -> ImportSummary:
    """
    Record a checked file in the ledger:
      - Create an `import_runs` row (committed immediately),
      - Insert every `ParseError` into `import_errors`,
      - Set the run's counts and mark it `succeeded`.

    Validated rows are not written anywhere.
    Raises only on infra errors, after rolling back and marking the run `failed`.
    """
    kind_value = ImportKind(kind).value

    ## -- create run ledger, committed immediately
    run_id: UUID = insert_import_run(conn, input_path=input_path, kind=kind_value)
    conn.commit()

    summary = ImportSummary.from_result(result, kind=kind_value, input_path=str(input_path), run_id=run_id)

    try:
        written = insert_import_errors(conn, run_id=run_id, errors=result.errors)
        finish_import_run(
            conn,
            run_id=run_id,
            status="succeeded",
            total=summary.total,
            valid=summary.valid,
            rejected=summary.rejected,
        )
        conn.commit()
        logger.info("recorded run %s with %d errors", run_id, written)
        return summary

    except Exception:
        # revert all changes (excluding run ledger)
        conn.rollback()
        finish_import_run(conn, run_id=run_id, status="failed")
        conn.commit()
        raise
