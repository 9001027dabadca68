"""Scan result dataclasses."""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class EntryRecord:
    """Single file or empty directory that matched every filter.

    ``id`` is unique within one scan result only. Timestamps are epoch
    milliseconds, or None where the platform cannot report them.
    """

    name: str
    path: str
    size: int
    is_dir: bool = False
    created_ms: int | None = None
    modified_ms: int | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Matched entries in traversal order plus their total size."""

    entries: tuple[EntryRecord, ...] = ()
    total_size: int = 0

    @property
    def matched_count(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [e.to_dict() for e in self.entries],
            "total_size": self.total_size,
        }


class ScanAggregator:
    """Collects matched entries during a walk and builds the final result."""

    def __init__(self) -> None:
        self._entries: list[EntryRecord] = []
        self._total_size = 0

    @property
    def matched_count(self) -> int:
        return len(self._entries)

    def add(self, record: EntryRecord) -> None:
        """Append a matched entry and account for its size."""
        self._entries.append(record)
        self._total_size += record.size

    def build(self) -> ScanResult:
        return ScanResult(entries=tuple(self._entries), total_size=self._total_size)


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Progress snapshot emitted while walking.

    ``done`` is set only on the terminal snapshot.
    """

    scanned_count: int
    matched_count: int
    current_path: str
    done: bool = False
