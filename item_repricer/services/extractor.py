from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from ..models.items import CandidateItem
from .coercion import parse_leading_decimal

"""Row extraction: one raw row -> CandidateItem.

Column positions are fixed: 0 item code, 1 item name, 2 unit price,
3 unit code, 8 section code.
"""

__all__ = [
    "ITEM_CODE_COL",
    "ITEM_NAME_COL",
    "PRICE_COL",
    "UNIT_COL",
    "SECTION_COL",
    "RowExtractionError",
    "extract_row",
    "parse_price",
]

ITEM_CODE_COL = 0
ITEM_NAME_COL = 1
PRICE_COL = 2
UNIT_COL = 3
SECTION_COL = 8

ZERO = Decimal(0)

logger = logging.getLogger(__name__)


class RowExtractionError(Exception):
    """Raised when a single row cannot be turned into a CandidateItem."""

    def __init__(self, row_number: int, reason: str) -> None:
        super().__init__(f"row {row_number}: {reason}")
        self.row_number = row_number
        self.reason = reason


def parse_price(value: Any) -> Decimal:
    """Unit price of a cell; unparsable or negative values become 0."""
    price = parse_leading_decimal(value)
    if price is None or price < 0:
        return ZERO
    return price


def extract_row(row: Any, row_number: int) -> CandidateItem:
    """Map one raw row to a CandidateItem.

    A row must reach the unit column; the section column is optional and
    reads as None when the row stops short of it.

    Raises:
        RowExtractionError: row is not a sequence or is too short
    """
    if row is None or isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
        raise RowExtractionError(row_number, f"expected a row of cells, got {type(row).__name__}")
    if len(row) <= UNIT_COL:
        raise RowExtractionError(
            row_number, f"row has {len(row)} cells, at least {UNIT_COL + 1} required"
        )

    item_code = row[ITEM_CODE_COL]
    item_name = row[ITEM_NAME_COL]
    section = row[SECTION_COL] if len(row) > SECTION_COL else None
    return CandidateItem(
        item_code=item_code if item_code is not None else "",
        item_name=item_name if item_name is not None else "",
        original_price=parse_price(row[PRICE_COL]),
        unit=row[UNIT_COL],
        section=section,
        source_row_number=row_number,
        code_missing=item_code is None,
    )
