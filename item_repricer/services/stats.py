from __future__ import annotations

from collections.abc import Sequence

from ..config.loader import PricingConfig
from ..models.items import ProcessedItem
from ..models.pipeline_result import Stats

"""Summary counters derived from the pipeline outputs."""

__all__ = [
    "aggregate_stats",
]


def aggregate_stats(
    *,
    original_row_count: int,
    removed_count: int,
    duplicate_count: int,
    items: Sequence[ProcessedItem],
    pricing: PricingConfig | None = None,
) -> Stats:
    """Build Stats; ``removed_count`` and ``duplicate_count`` are carried over as is."""
    pricing = pricing or PricingConfig()
    increased = [item for item in items if item.price_increased]
    return Stats(
        original_row_count=original_row_count,
        removed_count=removed_count,
        duplicate_count=duplicate_count,
        final_count=len(items),
        price_increased_count=len(increased),
        seven_percent_count=sum(1 for item in increased if item.percentage == pricing.high_tier_percent),
        seven_five_percent_count=sum(
            1 for item in increased
            if item.percentage == pricing.low_tier_percent and item.percentage != pricing.high_tier_percent
        ),
    )
