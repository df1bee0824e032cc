from __future__ import annotations

from ..models.pipeline_result import Stats

"""SUMMARY line rendering.

Format:
SUMMARY rows={original} removed={removed} duplicates={duplicates}
final={final} increased={increased} pct7={seven} pct7_5={seven_five}
"""


def render_summary_line(stats: Stats) -> str:
    """Render the SUMMARY line for one run.

    Examples:
        >>> from item_repricer.models import Stats
        >>> render_summary_line(Stats(10, 2, 1, 7, 6, 2, 4))
        'SUMMARY rows=10 removed=2 duplicates=1 final=7 increased=6 pct7=2 pct7_5=4'
    """
    return (
        f"SUMMARY rows={stats.original_row_count} "
        f"removed={stats.removed_count} "
        f"duplicates={stats.duplicate_count} "
        f"final={stats.final_count} "
        f"increased={stats.price_increased_count} "
        f"pct7={stats.seven_percent_count} "
        f"pct7_5={stats.seven_five_percent_count}"
    )
