"""Domain models for the item re-pricing pipeline.

This package contains the record types passed between pipeline stages
and the aggregated result handed to the reporting/export boundary.
"""

from .error_record import ErrorRecord
from .items import CandidateItem, ProcessedItem, UniqueItem
from .pipeline_result import PipelineResult, Stats

__all__ = [
    # Row / item records
    "CandidateItem",
    "UniqueItem",
    "ProcessedItem",
    # Aggregates
    "Stats",
    "PipelineResult",
    # Diagnostics
    "ErrorRecord",
]
