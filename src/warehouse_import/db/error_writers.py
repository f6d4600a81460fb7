from __future__ import annotations

from typing import Any, Sequence
from uuid import UUID

from psycopg import Connection, sql

from warehouse_import.parsing.types import ParseError


# fixed cols in `import_errors`:
_COLS = ("run_id", "row_number", "message")


def insert_import_errors(conn: Connection, *, run_id: UUID, errors: Sequence[ParseError]) -> int:
    """
    Insert `errors` into the DB's `import_errors`, returns how many were written.

    Table/column identifiers are fixed constants, values are parameterized.
    """
    query = sql.SQL("INSERT INTO {tbl} ({cols}) VALUES ({vals})").format(
        tbl=sql.Identifier("import_errors"),
        cols=sql.SQL(", ").join(sql.Identifier(c) for c in _COLS),
        vals=sql.SQL(", ").join(sql.Placeholder() for _ in _COLS),
    )

    params: list[tuple[Any, ...]] = [(run_id, e.row, e.message) for e in errors]

    if params:
        with conn.cursor() as cur:
            cur.executemany(query, params)
    return len(params)
