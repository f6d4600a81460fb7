from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal
from uuid import UUID

from psycopg import Connection


RunStatus = Literal["running", "succeeded", "failed"]


@dataclass(frozen=True)
class ImportRun:
    """One checked file, as recorded in the `import_runs` ledger."""
    run_id: UUID
    input_path: str
    kind: str               # `rack` or `item`
    status: RunStatus
    total: int = 0
    valid: int = 0
    rejected: int = 0


def insert_import_run(conn: Connection, *, input_path: Path, kind: str) -> UUID:
    """
    Create an `import_runs` row, returns `run_id`.

    Callers commit right away so the ledger row survives later failures.
    """
    row = conn.execute(
        """
        INSERT INTO import_runs (input_path, kind, status)
        VALUES (%s, %s, 'running')
        RETURNING run_id
        """,
        (str(input_path), kind),
    ).fetchone()
    assert row is not None
    return row[0]


def finish_import_run(
    conn: Connection,
    *,
    run_id: UUID,
    status: RunStatus,
    total: int = 0,
    valid: int = 0,
    rejected: int = 0,
) -> None:
    """Set the final `status` and row counts of a run."""
    conn.execute(
        """
        UPDATE import_runs
        SET status = %s, total = %s, valid = %s, rejected = %s
        WHERE run_id = %s
        """,
        (status, total, valid, rejected, run_id),
    )


def fetch_import_run(conn: Connection, *, run_id: UUID) -> ImportRun | None:
    """Read one run back from the ledger, `None` when `run_id` is unknown."""
    row = conn.execute(
        """
        SELECT run_id, input_path, kind, status, total, valid, rejected
        FROM import_runs
        WHERE run_id = %s
        """,
        (run_id,),
    ).fetchone()
    if row is None:
        return None
    return ImportRun(*row)
