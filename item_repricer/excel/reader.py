from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

"""Input table reader.

The first sheet of the workbook (or the CSV file) is read without a header
so that row 0 stays the header row and every data row keeps its position.
Cells pandas reports as NaN are handed on as None.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "InputTypeError",
    "DecodeError",
    "read_table",
    "frame_to_rows",
]

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".xls", ".csv")


class InputTypeError(Exception):
    """Raised when the input is not a recognized tabular file type."""


class DecodeError(Exception):
    """Raised when the input could not be parsed into rows at all."""


def frame_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into a list of row lists.

    NaN cells become None. Numpy scalars become Python scalars, and floats
    with no fractional part become ints (pandas upcasts an integer column to
    float as soon as it contains an empty cell).
    """
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        rows.append([_clean_cell(v) for v in raw])
    return rows


def _clean_cell(value: Any) -> Any:
    if _is_missing(value):
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):  # pragma: no cover - array-like cell
        return False


def read_table(path: Path) -> list[list[Any]]:
    """Read an input table returning its rows (header row included).

    Raises:
        InputTypeError: suffix is not one of SUPPORTED_SUFFIXES
        DecodeError: file missing or not parseable as a table
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise InputTypeError(
            f"unsupported input type '{suffix or path.name}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )
    if not path.exists():
        raise DecodeError(f"input file not found: {path}")

    try:
        if suffix == ".csv":
            df = pd.read_csv(path, header=None, dtype=object, keep_default_na=True)
        else:
            # sheet_name=0 -> first sheet only
            df = pd.read_excel(path, sheet_name=0, header=None)
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        raise DecodeError(f"failed to read {path.name}: {e}") from e

    return frame_to_rows(df)
