from __future__ import annotations

from dataclasses import dataclass

from .items import ProcessedItem

"""Aggregated pipeline output: the ordered item list plus summary counters."""

__all__ = [
    "Stats",
    "PipelineResult",
]


@dataclass(frozen=True)
class Stats:
    """Summary counters for one pipeline run.

    ``removed_count`` only counts rows rejected by the unit filter. Rows lost
    to extraction failure are not part of any counter here (see
    ``PipelineResult.failed_rows``).
    """
    original_row_count: int  # every non-header row seen
    removed_count: int  # unit filter rejections
    duplicate_count: int  # overwrite events in the deduplicator
    final_count: int  # len(items)
    price_increased_count: int
    seven_percent_count: int
    seven_five_percent_count: int


@dataclass(frozen=True)
class PipelineResult:
    """Result of one run over one input table."""
    items: list[ProcessedItem]
    stats: Stats
    failed_rows: int = 0  # extraction failures (diagnostic only)
    source_name: str = "<memory>"
