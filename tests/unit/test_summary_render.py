from __future__ import annotations

import re

from item_repricer.models.pipeline_result import Stats
from item_repricer.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY rows=([0-9]+) removed=([0-9]+) duplicates=([0-9]+) final=([0-9]+) "
    r"increased=([0-9]+) pct7=([0-9]+) pct7_5=([0-9]+)$"
)


def test_render_summary_line_fields():
    stats = Stats(
        original_row_count=7,
        removed_count=2,
        duplicate_count=1,
        final_count=4,
        price_increased_count=2,
        seven_percent_count=1,
        seven_five_percent_count=1,
    )
    line = render_summary_line(stats)
    match = SUMMARY_PATTERN.match(line)
    assert match, line
    assert match.groups() == ("7", "2", "1", "4", "2", "1", "1")


def test_render_summary_line_all_zero():
    line = render_summary_line(Stats(0, 0, 0, 0, 0, 0, 0))
    assert line == "SUMMARY rows=0 removed=0 duplicates=0 final=0 increased=0 pct7=0 pct7_5=0"
