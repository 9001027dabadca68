"""Declutter data models."""

from declutter.models.scan_options import ScanOptions, mb_to_bytes
from declutter.models.scan_result import EntryRecord, ScanAggregator, ScanProgress, ScanResult
from declutter.models.clean_result import CleanProgress, DeletionFailure, DeletionOutcome

__all__ = [
    "CleanProgress",
    "DeletionFailure",
    "DeletionOutcome",
    "EntryRecord",
    "ScanAggregator",
    "ScanOptions",
    "ScanProgress",
    "ScanResult",
    "mb_to_bytes",
]
