from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from item_repricer.logging.error_log import ErrorLogBuffer
from item_repricer.services.pipeline import process_file

"""Integration test: CSV input where every cell arrives as text."""


def test_csv_text_cells(temp_workdir: Path):
    path = temp_workdir / "data" / "items.csv"
    path.write_text(
        "code,name,price,unit,a,b,c,d,section\n"
        "X1,Tomato,150,1,,,,,10\n"
        "X2,Onion,10.2,4,,,,,52\n"
        "X3,Garlic,5,3,,,,,10\n"
        "X1,Tomato,100,4,,,,,10\n",
        encoding="utf-8",
    )
    log = ErrorLogBuffer()
    result = process_file(path, error_log=log, show_progress=False)

    assert [i.item_code for i in result.items] == ["X1", "X2"]
    assert result.items[0].new_price == Decimal("107.95")
    assert result.items[1].price_increased is False
    assert result.items[1].new_price == Decimal("10.50")
    assert result.stats.removed_count == 1
    assert result.stats.duplicate_count == 1
    assert len(log) == 0
