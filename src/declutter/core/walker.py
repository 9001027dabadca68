"""Filtered, symlink-safe directory walk.

The walk is depth-first and pre-order: a directory is yielded before its
contents. Subtrees that cannot be listed are skipped silently, and
symlinks are never descended into.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Callable, Iterator

from declutter.core.classifier import classify, is_effectively_empty, is_system_artifact
from declutter.core.errors import InvalidRootError
from declutter.core.filters import Candidate, matches
from declutter.models.scan_options import ScanOptions
from declutter.models.scan_result import EntryRecord, ScanAggregator, ScanProgress, ScanResult
from declutter.utils import emit

log = logging.getLogger(__name__)

ScanProgressCallback = Callable[[ScanProgress], None]

# Emit a progress snapshot every this many visited entries.
PROGRESS_INTERVAL = 50


def _list_dir(path: str) -> list[os.DirEntry]:
    try:
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as exc:
        log.debug("Skipping unreadable directory %s: %s", path, exc)
        return []


def _is_real_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def walk(root: str, excluded: frozenset[str] = frozenset()) -> Iterator[os.DirEntry]:
    """Yield every entry below *root*, never *root* itself.

    Entries whose path is in *excluded* are neither yielded nor
    descended into.
    """
    stack: list[Iterator[os.DirEntry]] = [iter(_list_dir(root))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        if entry.path in excluded:
            log.debug("Excluded: %s", entry.path)
            continue
        yield entry
        if _is_real_dir(entry):
            stack.append(iter(_list_dir(entry.path)))


def scan_tree(options: ScanOptions, on_progress: ScanProgressCallback | None = None) -> ScanResult:
    """Walk the target directory and collect entries matching *options*.

    Args:
        options: Target directory and filter criteria.
        on_progress: Optional callback receiving a snapshot every
            ``PROGRESS_INTERVAL`` visited entries and once at the end.

    Returns:
        The matched entries in traversal order and their total size.

    Raises:
        InvalidRootError: If the target is missing or not a directory.
    """
    root = options.target_dir
    if not os.path.isdir(root):
        raise InvalidRootError(root)

    log.info("Scanning %s", root)
    start = time.monotonic()
    aggregator = ScanAggregator()
    scanned = 0

    for entry in walk(root, options.excluded):
        scanned += 1
        if scanned % PROGRESS_INTERVAL == 0:
            emit(on_progress, ScanProgress(scanned, aggregator.matched_count, entry.path))

        info = classify(entry.path)
        if info is None or info.is_symlink:
            continue
        if is_system_artifact(entry.name):
            continue

        candidate = Candidate(
            name=entry.name,
            path=entry.path,
            size=info.size,
            is_dir=info.is_dir,
            created_ms=info.created_ms,
            modified_ms=info.modified_ms,
            is_empty=info.is_dir and options.include_empty_dirs and is_effectively_empty(entry.path),
        )
        if not matches(candidate, options):
            continue

        aggregator.add(
            EntryRecord(
                name=candidate.name,
                path=candidate.path,
                size=candidate.size,
                is_dir=candidate.is_dir,
                created_ms=candidate.created_ms,
                modified_ms=candidate.modified_ms,
            )
        )

    result = aggregator.build()
    emit(on_progress, ScanProgress(scanned, result.matched_count, root, done=True))
    log.info(
        "Scanned %d entries in %.2fs, %d matched (%d bytes)",
        scanned,
        time.monotonic() - start,
        result.matched_count,
        result.total_size,
    )
    return result
