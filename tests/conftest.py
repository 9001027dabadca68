"""Shared test fixtures."""

from __future__ import annotations

import os
import shutil

import pytest


class FakeTrash:
    """Stand-in for send2trash that deletes permanently and records calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def __call__(self, path: str) -> None:
        self.calls.append(path)
        if path in self.fail_on:
            raise PermissionError(13, "Permission denied", path)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)


@pytest.fixture
def fake_trash():
    return FakeTrash()


def _write_file(path, size: int = 0, mtime_ms: int | None = None):
    """Create a file of *size* bytes, optionally with a given mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    if mtime_ms is not None:
        os.utime(path, ns=(mtime_ms * 1_000_000, mtime_ms * 1_000_000))
    return path


@pytest.fixture
def make_file():
    """Factory creating sized files with an optional mtime."""
    return _write_file


@pytest.fixture
def tree(tmp_path):
    """Build a small tree under ``tmp_path / "root"``.

    root/
        big.log          2048 bytes
        small.txt        10 bytes
        .DS_Store
        docs/
            report.PDF   500 bytes
            Thumbs.db
        empty/
        only_artifacts/
            .ds_store
        nested/
            deeper/
                data.bin 100 bytes
    """
    root = tmp_path / "root"
    root.mkdir()
    _write_file(root / "big.log", 2048)
    _write_file(root / "small.txt", 10)
    _write_file(root / ".DS_Store", 6)
    _write_file(root / "docs" / "report.PDF", 500)
    _write_file(root / "docs" / "Thumbs.db", 12)
    (root / "empty").mkdir()
    _write_file(root / "only_artifacts" / ".ds_store", 3)
    _write_file(root / "nested" / "deeper" / "data.bin", 100)
    return root
