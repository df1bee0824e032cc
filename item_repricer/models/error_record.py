from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for row diagnostics.

Rows that cannot be extracted are dropped from the pipeline; each drop is
described by one ErrorRecord and written as a JSON Lines entry. ``row=-1``
is accepted for table-level problems where no row can be named.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured diagnostic record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Name of the input table being processed
        row: Row number (1-based). Use -1 when the row is unknown
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description of the failure
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON line containing exactly the dataclass fields."""
        return json.dumps(asdict(self), ensure_ascii=False)
