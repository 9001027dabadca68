"""Cleanup result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CleanProgress:
    """Progress event emitted once per requested path."""

    total: int
    current: int
    current_path: str


@dataclass(frozen=True, slots=True)
class DeletionFailure:
    """A path that could not be moved to the trash."""

    path: str
    message: str


def format_failures(failures: list[DeletionFailure]) -> str:
    """Render failures as one aggregate message, one path per line."""
    lines = [f"Failed to delete {f.path}: {f.message}" for f in failures]
    return "Some files could not be deleted:\n" + "\n".join(lines)


@dataclass(slots=True)
class DeletionOutcome:
    """Result of a deletion batch.

    The batch always runs to completion; ``failures`` collects every
    path that could not be removed, in request order.
    """

    deleted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)
    failures: list[DeletionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        """Single aggregate message describing every failure."""
        if self.ok:
            return ""
        return format_failures(self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "deleted": list(self.deleted),
            "skipped": list(self.skipped),
            "pruned": list(self.pruned),
            "failures": [{"path": f.path, "message": f.message} for f in self.failures],
        }
