"""Exceptions raised by the scan and cleanup engine."""

from __future__ import annotations

from declutter.models.clean_result import DeletionFailure, DeletionOutcome, format_failures


class DeclutterError(Exception):
    """Base class for engine errors."""


class InvalidRootError(DeclutterError):
    """Raised when the scan target is missing or not a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid or non-existent target directory: {path}")
        self.path = path


class PartialDeletionError(DeclutterError):
    """Raised after a deletion batch in which one or more paths failed.

    The batch has already run to completion when this is raised.
    """

    def __init__(self, failures: list[DeletionFailure], outcome: DeletionOutcome | None = None) -> None:
        super().__init__(format_failures(failures))
        self.failures = list(failures)
        self.outcome = outcome
