from __future__ import annotations

import json
from pathlib import Path

from item_repricer.logging.error_log import ErrorLogBuffer
from item_repricer.services.pipeline import run_pipeline

"""Contract test: row diagnostics are JSON Lines with a fixed key set."""

EXPECTED_KEYS = {"timestamp", "file", "row", "error_type", "message"}


def test_row_failures_logged_with_fixed_schema(temp_workdir: Path):
    rows = [["h1", "h2", "h3", "h4"], ["A", "a", 1], ["B", "b", 2, 1], None]
    log = ErrorLogBuffer()
    run_pipeline(rows, source_name="in.xlsx", error_log=log, show_progress=False)
    path = log.flush()

    entries = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert len(entries) == 2
    for entry in entries:
        assert set(entry) == EXPECTED_KEYS
        assert entry["timestamp"].endswith("Z")
        assert entry["error_type"] == "ROW_EXTRACTION_ERROR"
        assert entry["file"] == "in.xlsx"
    assert [e["row"] for e in entries] == [2, 4]
