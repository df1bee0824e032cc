"""Spreadsheet item re-pricing tool.

Reads a priced item table, filters it by unit, deduplicates item codes,
applies the tiered markup with custom rounding and reports summary counters.
"""

__version__ = "0.1.0"
