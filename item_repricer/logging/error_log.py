from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run diagnostics for rows the pipeline had to drop.

Rows are collected while a table is processed and written out as JSON Lines
(one ErrorRecord per line) when the run ends. A clean run leaves no file
behind; otherwise the run owns ``<logs_dir>/errors-YYYYMMDD-HHMMSS.log``
(UTC stamp taken when the first flush happens).
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "ROW_EXTRACTION_ERROR",
]

DEFAULT_LOGS_DIR = Path("./logs")
STAMP_FORMAT = "%Y%m%d-%H%M%S"
ROW_EXTRACTION_ERROR = "ROW_EXTRACTION_ERROR"


class ErrorLogBuffer:
    """Row diagnostics of one pipeline run, kept in memory until flushed."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = logs_dir or DEFAULT_LOGS_DIR
        self._pending: list[ErrorRecord] = []
        self._target: Path | None = None

    @property
    def file_path(self) -> Path:
        """Log file of this run; the directory is created on first use."""
        if self._target is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            self._target = self._logs_dir / f"errors-{datetime.now(UTC).strftime(STAMP_FORMAT)}.log"
        return self._target

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._pending)

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def add_row_failure(self, file: str, row: int, reason: str) -> ErrorRecord:
        """Record a data row that could not be extracted."""
        record = ErrorRecord.create(file=file, row=row, error_type=ROW_EXTRACTION_ERROR, message=reason)
        self._pending.append(record)
        return record

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(list(self._pending))

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Write pending records and clear them.

        Returns:
            Path of the log file, or None if nothing was pending
        """
        if not self._pending:
            return None
        target = self.file_path
        lines = "".join(record.to_json_line() + "\n" for record in self._pending)
        with target.open("a", encoding="utf-8") as f:
            f.write(lines)
        self._pending.clear()
        return target
