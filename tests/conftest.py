# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

HEADER = ["code", "name", "price", "unit", "c4", "c5", "c6", "c7", "section"]


def make_row(code: Any, name: Any, price: Any, unit: Any, section: Any = None) -> list[Any]:
    """Build a 9-cell data row with the fixed column positions."""
    return [code, name, price, unit, None, None, None, None, section]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """allowed_units: [1, 4]
pricing:
  exempt_section: 52
  threshold: 150
  high_tier_percent: 7
  low_tier_percent: 7.5
output_directory: ./output
export_sheet_name: Updated Items
export_prefix: updated_items
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "repricer.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_rows() -> list[list[Any]]:
    """Header + 7 data rows covering filter, duplicate and exemption cases."""
    return [
        HEADER,
        make_row("A1", "Rice 5kg", 100, 1, 10),       # row 2: 7.5% -> 107.95
        make_row("B2", "Oil 1L", 150, "1", 11),        # row 3: 7%   -> 160.95
        make_row("C3", "Sugar", 40, 2, 10),            # row 4: unit 2 -> removed
        make_row("A1", "Rice 5kg (new)", 120, 4, 10),  # row 5: overwrites A1 -> 129
        make_row("D4", "Tea", 200.3, 4, 52),           # row 6: exempt -> 200.50
        make_row("E5", "Salt", 10, 7, 10),             # row 7: unit 7 -> removed
        make_row("F6", "Flour", 60, 1, "52"),          # row 8: exempt (text section) -> 60
    ]


@pytest.fixture()
def make_workbook() -> Callable[[Path, str, list[list[Any]]], Path]:
    def _make(directory: Path, name: str, rows: list[list[Any]]) -> Path:
        path = directory / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name="Items", header=False, index=False)
        return path
    return _make
