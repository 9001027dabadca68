"""Trash-backed batch deletion with empty-ancestor pruning."""

from __future__ import annotations

import logging
import os
import shutil
from typing import Callable

from send2trash import send2trash

from declutter.core.classifier import is_effectively_empty
from declutter.models.clean_result import CleanProgress, DeletionFailure, DeletionOutcome
from declutter.utils import emit

log = logging.getLogger(__name__)

CleanProgressCallback = Callable[[CleanProgress], None]
TrashFunction = Callable[[str], None]


def _is_strictly_inside(path: str, root: str) -> bool:
    if path == root:
        return False
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Different drives or mixed absolute/relative paths
        return False


def prune_empty_ancestors(directory: str, scan_root: str) -> list[str]:
    """Remove *directory* and its ancestors while they hold only artifacts.

    The sweep moves upward one parent at a time and never touches
    *scan_root* or anything outside it. It stops at the first directory
    that still has real content or cannot be removed.

    Returns:
        The directories that were removed, deepest first.
    """
    root = os.path.abspath(scan_root)
    current = os.path.abspath(directory)
    removed: list[str] = []

    while _is_strictly_inside(current, root):
        if not is_effectively_empty(current):
            break
        try:
            shutil.rmtree(current)
        except OSError as exc:
            log.debug("Could not prune %s: %s", current, exc)
            break
        log.debug("Pruned empty directory %s", current)
        removed.append(current)
        current = os.path.dirname(current)

    return removed


def remove_paths(
    paths: list[str],
    scan_root: str,
    *,
    on_progress: CleanProgressCallback | None = None,
    trash: TrashFunction = send2trash,
) -> DeletionOutcome:
    """Move each path to the trash, pruning directories left empty.

    Paths that no longer exist are skipped. A failure on one path is
    recorded and the batch continues with the next one.

    Args:
        paths: Absolute paths to remove, processed in order.
        scan_root: Root of the scan the paths came from; bounds pruning.
        on_progress: Optional callback receiving one event per path.
        trash: Function moving a single path to the trash.
    """
    outcome = DeletionOutcome()
    total = len(paths)

    for index, path in enumerate(paths, 1):
        emit(on_progress, CleanProgress(total=total, current=index, current_path=path))

        if not os.path.lexists(path):
            log.debug("Already gone, skipping: %s", path)
            outcome.skipped.append(path)
            continue

        try:
            trash(path)
        except OSError as exc:
            log.warning("Failed to delete %s: %s", path, exc)
            outcome.failures.append(DeletionFailure(path=path, message=str(exc)))
            continue

        outcome.deleted.append(path)
        outcome.pruned.extend(prune_empty_ancestors(os.path.dirname(os.path.abspath(path)), scan_root))

    log.info(
        "Deleted %d of %d paths (%d skipped, %d failed, %d directories pruned)",
        len(outcome.deleted),
        total,
        len(outcome.skipped),
        len(outcome.failures),
        len(outcome.pruned),
    )
    return outcome
