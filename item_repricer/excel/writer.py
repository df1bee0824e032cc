from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

import pandas as pd

from ..models.items import ProcessedItem
from ..services.formatting import format_price

"""Export of the processed item list.

The exported price is the on-screen display string parsed back to a number,
so the file matches what the user saw (including manual overrides).
"""

__all__ = [
    "EXPORT_COLUMNS",
    "ExportError",
    "build_export_frame",
    "export_filename",
    "export_items",
]

EXPORT_COLUMNS = ["Item Code", "Item Name", "Unit Price"]
TIMESTAMP_FMT = "%Y-%m-%dT%H-%M-%S"


class ExportError(Exception):
    """Raised when the item list cannot be exported."""


def build_export_frame(items: Sequence[ProcessedItem]) -> pd.DataFrame:
    records = [
        [item.item_code, item.item_name, float(format_price(item.new_price))]
        for item in items
    ]
    return pd.DataFrame(records, columns=EXPORT_COLUMNS)


def export_filename(prefix: str, now: datetime | None = None) -> str:
    stamp = (now or datetime.now(UTC)).strftime(TIMESTAMP_FMT)
    return f"{prefix}_{stamp}.xlsx"


def export_items(
    items: Sequence[ProcessedItem],
    directory: Path,
    *,
    prefix: str = "updated_items",
    sheet_name: str = "Updated Items",
    now: datetime | None = None,
) -> Path:
    """Write ``items`` to a timestamped .xlsx file in ``directory``.

    Returns:
        Path of the written file

    Raises:
        ExportError: no items, or the file could not be written
    """
    if not items:
        raise ExportError("no data to export")

    df = build_export_frame(items)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / export_filename(prefix, now)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    except OSError as e:
        raise ExportError(f"failed to write export file: {e}") from e
    return path
