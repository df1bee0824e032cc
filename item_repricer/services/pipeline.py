from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..config.loader import RepricerConfig, default_config
from ..excel.reader import read_table
from ..logging.error_log import ErrorLogBuffer
from ..models.pipeline_result import PipelineResult
from .dedup import Deduplicator
from .extractor import RowExtractionError, extract_row
from .filtering import UnitFilter
from .pricing import price_item
from .progress import RowProgress
from .stats import aggregate_stats

"""Pipeline orchestration for one input table.

Single synchronous pass:
raw rows -> extract -> unit filter -> deduplicate -> price -> round,
with the counters collected along the way. Every call builds its state from
scratch; nothing carries over between runs.
"""

__all__ = [
    "ProcessingError",
    "InsufficientDataError",
    "run_pipeline",
    "process_file",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""


class InsufficientDataError(ProcessingError):
    """The table has no data rows (header only, or empty)."""


def run_pipeline(
    rows: Sequence[Any],
    config: RepricerConfig | None = None,
    *,
    source_name: str = "<memory>",
    error_log: ErrorLogBuffer | None = None,
    show_progress: bool | None = None,
) -> PipelineResult:
    """Run the re-pricing pipeline over ``rows`` (row 0 is the header).

    Rows that cannot be extracted are dropped and logged; they do not count
    as removed rows.

    Raises:
        InsufficientDataError: fewer than two rows (no data after the header)
    """
    config = config or default_config()
    if len(rows) < 2:
        raise InsufficientDataError(
            f"insufficient data: {source_name} has {len(rows)} row(s), a header and at least one data row are required"
        )

    data_rows = rows[1:]
    unit_filter = UnitFilter(config.allowed_units)
    dedup = Deduplicator()
    failed_rows = 0

    with RowProgress(len(data_rows), enabled=show_progress) as progress:
        for offset, row in enumerate(data_rows):
            progress.update()
            # +2: header is row 1 and offsets are 0-based
            row_number = offset + 2
            try:
                candidate = extract_row(row, row_number)
            except RowExtractionError as e:
                failed_rows += 1
                logger.debug(f"skip {source_name} {e}")
                if error_log is not None:
                    error_log.add_row_failure(source_name, row_number, e.reason)
                continue

            if unit_filter.keep(candidate):
                dedup.add(candidate)

        progress.set_postfix(kept=len(dedup), removed=unit_filter.removed_count)

    items = [price_item(unique, index, config.pricing) for index, unique in enumerate(dedup.items())]
    stats = aggregate_stats(
        original_row_count=len(data_rows),
        removed_count=unit_filter.removed_count,
        duplicate_count=dedup.duplicate_count,
        items=items,
        pricing=config.pricing,
    )
    logger.debug(
        f"pipeline {source_name}: rows={stats.original_row_count} kept={stats.final_count} failed={failed_rows}"
    )
    return PipelineResult(items=items, stats=stats, failed_rows=failed_rows, source_name=source_name)


def process_file(
    path: Path,
    config: RepricerConfig | None = None,
    *,
    error_log: ErrorLogBuffer | None = None,
    show_progress: bool | None = None,
) -> PipelineResult:
    """Read ``path`` and run the pipeline over its first sheet.

    InputTypeError / DecodeError from the reader propagate unchanged so the
    caller can report them apart from an empty result.
    """
    rows = read_table(path)
    return run_pipeline(
        rows,
        config,
        source_name=path.name,
        error_log=error_log,
        show_progress=show_progress,
    )
