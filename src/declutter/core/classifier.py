"""Classification of single filesystem entries."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass

log = logging.getLogger(__name__)

# OS-generated marker files, compared case-insensitively.
SYSTEM_ARTIFACTS: frozenset[str] = frozenset({".ds_store", "thumbs.db"})


@dataclass(frozen=True, slots=True)
class EntryInfo:
    """Metadata of one entry, read without following symlinks."""

    is_symlink: bool
    is_dir: bool
    size: int
    created_ms: int | None = None
    modified_ms: int | None = None


def is_system_artifact(name: str) -> bool:
    """Check whether a file name is an ignorable OS artifact."""
    return name.lower() in SYSTEM_ARTIFACTS


def classify(path: str) -> EntryInfo | None:
    """Read metadata for *path* without following symlinks.

    Returns None when the metadata cannot be read (permission denied,
    entry removed concurrently, ...). Directories always report size 0.
    """
    try:
        st = os.lstat(path)
    except OSError as exc:
        log.debug("Cannot stat %s: %s", path, exc)
        return None

    is_dir = stat.S_ISDIR(st.st_mode)
    return EntryInfo(
        is_symlink=stat.S_ISLNK(st.st_mode),
        is_dir=is_dir,
        size=0 if is_dir else st.st_size,
        created_ms=_birthtime_ms(st),
        modified_ms=st.st_mtime_ns // 1_000_000,
    )


def _birthtime_ms(st: os.stat_result) -> int | None:
    """Creation time in epoch ms, or None where the platform lacks it."""
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is None:
        return None
    return int(birthtime * 1000)


def is_effectively_empty(path: str) -> bool:
    """Check whether a directory holds nothing but system artifacts.

    An unreadable directory is never considered empty.
    """
    try:
        with os.scandir(path) as it:
            return all(is_system_artifact(entry.name) for entry in it)
    except OSError as exc:
        log.debug("Cannot list %s: %s", path, exc)
        return False
