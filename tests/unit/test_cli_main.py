from __future__ import annotations
from pathlib import Path

import pytest

from item_repricer.cli import main as cli_main
from item_repricer.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def items_xlsx(temp_workdir: Path, sample_rows, make_workbook) -> Path:
    return make_workbook(temp_workdir / "data", "items.xlsx", sample_rows)


def test_cli_success_prints_summary(items_xlsx: Path, capsys):
    code = cli_main([str(items_xlsx)])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Processing:" in out
    assert "SUMMARY rows=7 removed=2 duplicates=1 final=4 increased=2 pct7=1 pct7_5=1" in out


def test_cli_show_prints_formatted_prices(items_xlsx: Path, capsys):
    code = cli_main([str(items_xlsx), "--show"])
    out = capsys.readouterr().out
    assert code == 0
    assert "0\tA1\tRice 5kg (new)\t129\n" in out
    assert "1\tB2\tOil 1L\t160.95\n" in out
    assert "2\tD4\tTea\t200.50\n" in out


def test_cli_set_price(items_xlsx: Path, capsys):
    code = cli_main([str(items_xlsx), "--set-price", "1=42.3", "--show"])
    out = capsys.readouterr().out
    assert code == 0
    assert "price updated: index=1 code=B2 price=42.30" in out
    assert "1\tB2\tOil 1L\t42.30\n" in out


def test_cli_set_price_rejected_keeps_value(items_xlsx: Path, capsys):
    code = cli_main([str(items_xlsx), "--set-price", "1=-5", "--set-price", "9=10", "--show"])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR set-price: invalid price '-5'" in out
    assert "ERROR set-price: no item at index 9" in out
    assert "1\tB2\tOil 1L\t160.95\n" in out


def test_cli_set_price_bad_argument(items_xlsx: Path):
    with pytest.raises(SystemExit) as e:
        cli_main([str(items_xlsx), "--set-price", "oops"])
    assert e.value.code == 2


def test_cli_export(items_xlsx: Path, temp_workdir: Path, capsys):
    out_dir = temp_workdir / "exports"
    code = cli_main([str(items_xlsx), "--export", "--output-dir", str(out_dir)])
    out = capsys.readouterr().out
    assert code == 0
    files = list(out_dir.glob("updated_items_*.xlsx"))
    assert len(files) == 1
    assert f"exported 4 item(s) to {files[0]}" in out


def test_cli_export_dir_from_dotenv(items_xlsx: Path, temp_workdir: Path, monkeypatch):
    monkeypatch.setenv("REPRICER_OUTPUT_DIR", "placeholder")
    (temp_workdir / ".env").write_text("REPRICER_OUTPUT_DIR=env_out\n", encoding="utf-8")
    code = cli_main([str(items_xlsx), "--export"])
    assert code == 0
    assert len(list((temp_workdir / "env_out").glob("*.xlsx"))) == 1


def test_cli_uses_config_file(items_xlsx: Path, temp_workdir: Path, capsys):
    (temp_workdir / "config" / "repricer.yml").write_text("allowed_units: [1]\n", encoding="utf-8")
    code = cli_main([str(items_xlsx)])
    out = capsys.readouterr().out
    assert code == 0
    # the unit-4 rows (A1 row 5 and D4) are now filtered out too
    assert "SUMMARY rows=7 removed=4 duplicates=0 final=3" in out


def test_cli_inspect_data(items_xlsx: Path, capsys):
    code = cli_main([str(items_xlsx), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: items.xlsx rows=8" in out
    assert "SUMMARY" not in out


def test_cli_debug_mode(items_xlsx: Path, capsys):
    code = cli_main([str(items_xlsx), "--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
