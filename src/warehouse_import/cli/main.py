from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from warehouse_import.cli.loader import check_file, record_import
from warehouse_import.db.connect import connect
from warehouse_import.db.initialize import db_init
from warehouse_import.ingest.readers import DEFAULT_DELIMITER
from warehouse_import.ingest.summary import ImportSummary
from warehouse_import.parsing.types import ImportKind


def main(argv: list[str] | None = None) -> int:
    """
    A CLI for checking rack and item CSV files before import.

    The `cmd` options are:
    ## check:
    Parse and validate a CSV file, print every row error and a summary line.
    - `--input` as the path to the CSV file,
    - `--kind` as `rack` or `item`,
    - `--delimiter` (default `;`),
    - `--keep-empty-lines` to tokenize empty lines instead of skipping them,
    - `--physical-rows` to number errors by physical line instead of data row,
    - `--json` to print the full result as JSON instead,
    - `--record` to write the run and its errors into the Postgres ledger.

    Exits with 0 when the file has no errors, 1 otherwise.

    ### Example check usage:
    - `warehouse-import check --input racks.csv --kind rack`
    - `warehouse-import check --input items.csv --kind item --delimiter , --record`

    ## db:
    - `init` creates the ledger tables, `--sql` points at a `.sql` file or a dir of them.
    """
    p = argparse.ArgumentParser(prog="warehouse-import")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr.")
    sub = p.add_subparsers(dest="cmd", required=True)

    # check cmd
    check = sub.add_parser("check", help="Validate a rack or item CSV file.")
    check.add_argument("--input", required=True, help="Path to the CSV file.")
    check.add_argument("--kind", required=True, choices=[k.value for k in ImportKind])
    check.add_argument("--delimiter", default=DEFAULT_DELIMITER, help="Cell delimiter (default ';').")
    check.add_argument("--keep-empty-lines", action="store_true", help="Do not skip empty lines while tokenizing.")
    check.add_argument("--physical-rows", action="store_true", help="Report physical line numbers.")
    check.add_argument("--json", action="store_true", help="Print the full result as JSON.")
    check.add_argument("--record", action="store_true", help="Record the run and its errors in Postgres.")

    # db cmd
    db = sub.add_parser("db", help="Database utilities.")
    db_sub = db.add_subparsers(dest="db_cmd", required=True)

    db_init_p = db_sub.add_parser("init", help="Initialize the ledger schema from SQL file(s).")
    db_init_p.add_argument("--sql", default="sql", help="Path to schema SQL file OR a directory of `.sql` files.")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "check":
        input_path = Path(args.input)
        result = check_file(
            input_path,
            kind=args.kind,
            delimiter=args.delimiter,
            skip_empty_lines=not args.keep_empty_lines,
            row_numbering="physical" if args.physical_rows else "logical",
        )

        if args.record:
            with connect() as conn:
                summary = record_import(conn, input_path=input_path, kind=args.kind, result=result)
        else:
            summary = ImportSummary.from_result(result, kind=args.kind, input_path=str(input_path))

        if args.json:
            print(json.dumps(result.to_mapping(), ensure_ascii=False, indent=2))
        else:
            for e in result.errors:
                print(f"row {e.row}: {e.message}")
            print(summary.render_one_line())

        return 0 if not result.errors else 1

    if args.cmd == "db" and args.db_cmd == "init":
        db_init(sql_path=Path(args.sql))
        print(f"Initialized schema from {args.sql}")
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
