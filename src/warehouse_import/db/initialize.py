from __future__ import annotations

from pathlib import Path

import psycopg

from warehouse_import.db.connect import connect


def run_sql_file(conn: psycopg.Connection, sql_path: Path) -> None:
    """Read and execute a `.sql` file, one statement at a time."""
    text = sql_path.read_text(encoding="utf-8")

    # drop `--` comment lines first so a comment can't swallow the statement after it
    body = "\n".join(line for line in text.splitlines() if not line.lstrip().startswith("--"))
    statements = [s.strip() for s in body.split(";") if s.strip()]

    with conn.cursor() as cur:
        for i, stmt in enumerate(statements, 1):
            try:
                cur.execute(stmt)
            except Exception as e:
                raise RuntimeError(
                    f"DB init failed in {sql_path} on statement #{i}\n"
                    f"Postgres raised with: {e}\n"
                    f"--- statement ---\n{stmt}\n--- end ---\n"
                ) from e
    conn.commit()


def db_init(*, sql_path: Path) -> None:
    """
    Create (or re-create) the ledger tables.

    - If `sql_path` is a dir, run all `*.sql` files sorted ASC.
    - If `sql_path` is just one file, run just that file.
    """
    with connect() as conn:
        if sql_path.is_dir():
            for p in sorted(sql_path.glob("*.sql")):
                run_sql_file(conn, p)
        else:
            run_sql_file(conn, sql_path)
