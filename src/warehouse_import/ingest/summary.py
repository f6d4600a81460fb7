from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from warehouse_import.parsing.types import ParseResult


@dataclass(frozen=True)
class ImportSummary:
    """Counts for one checked file, plus its ledger `run_id` when recorded."""
    kind: str
    input_path: str
    total: int          # non-blank data rows
    valid: int
    rejected: int       # rows with at least one schema issue
    errors: int         # every reported error, tokenizer errors included
    run_id: UUID | None = None

    @classmethod
    def from_result(cls, result: ParseResult[Any], *, kind: str, input_path: str, run_id: UUID | None = None) -> "ImportSummary":
        total = len(result.raw_rows)
        valid = len(result.rows)
        return cls(
            kind=kind,
            input_path=input_path,
            total=total,
            valid=valid,
            rejected=total - valid,
            errors=len(result.errors),
            run_id=run_id,
        )

    def render_one_line(self) -> str:
        """How each line of summary is formatted for the terminal."""
        line = f"{self.kind}: total={self.total} valid={self.valid} rejected={self.rejected} errors={self.errors}"
        if self.run_id is not None:
            line += f" run_id={self.run_id}"
        return line
