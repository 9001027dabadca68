"""Tests for the data models."""

from __future__ import annotations

import os

import pytest

from declutter.models import (
    DeletionFailure,
    DeletionOutcome,
    EntryRecord,
    ScanAggregator,
    ScanOptions,
    ScanResult,
    mb_to_bytes,
)


class TestScanOptions:
    def test_defaults(self):
        options = ScanOptions(target_dir="/data")
        assert options.min_size_bytes is None
        assert options.extensions == frozenset()
        assert options.excluded == frozenset()
        assert options.include_empty_dirs is False

    def test_extensions_are_normalised(self):
        options = ScanOptions(target_dir="/data", extensions=frozenset({".LOG", "Txt"}))
        assert options.extensions == frozenset({"log", "txt"})

    def test_paths_are_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        options = ScanOptions(target_dir="sub/", excluded=frozenset({"sub/skip/"}))
        assert options.target_dir == str(tmp_path / "sub")
        assert options.excluded == frozenset({str(tmp_path / "sub" / "skip")})

    def test_negative_min_size_rejected(self):
        with pytest.raises(ValueError):
            ScanOptions(target_dir="/data", min_size_bytes=-1)

    def test_is_immutable(self):
        options = ScanOptions(target_dir="/data")
        with pytest.raises(AttributeError):
            options.target_dir = "/other"  # type: ignore[misc]

    def test_from_dict_wire_format(self):
        options = ScanOptions.from_dict(
            {
                "target_dir": "/data",
                "min_size_mb": 10,
                "created_before_ms": 1000,
                "modified_before_ms": 2000,
                "extensions": ["LOG"],
                "include_empty_dirs": True,
                "whitelist": ["/data/keep"],
            }
        )
        assert options.min_size_bytes == mb_to_bytes(10) == 10 * 1024 * 1024
        assert options.created_before_ms == 1000
        assert options.modified_before_ms == 2000
        assert options.extensions == frozenset({"log"})
        assert options.include_empty_dirs is True
        assert options.excluded == frozenset({os.path.abspath("/data/keep")})

    def test_from_dict_prefers_bytes(self):
        options = ScanOptions.from_dict({"target_dir": "/data", "min_size_bytes": 5, "min_size_mb": 1})
        assert options.min_size_bytes == 5

    def test_from_dict_nulls(self):
        options = ScanOptions.from_dict({"target_dir": "/data", "extensions": None, "whitelist": None})
        assert options.extensions == frozenset()
        assert options.excluded == frozenset()

    def test_from_dict_requires_target(self):
        with pytest.raises(ValueError):
            ScanOptions.from_dict({"min_size_mb": 1})

    @pytest.mark.parametrize(
        "payload",
        [
            {"extensions": "log"},
            {"extensions": ["log", 3]},
            {"whitelist": "/data/keep"},
            {"excluded": [None]},
            {"include_empty_dirs": "false"},
            {"include_empty_dirs": 1},
            {"modified_before_ms": "1700000000000"},
            {"created_before_ms": 1.5},
            {"created_before_ms": True},
            {"min_size_mb": "10"},
            {"min_size_bytes": [1]},
            {"target_dir": 7},
        ],
    )
    def test_from_dict_rejects_wrong_types(self, payload):
        with pytest.raises(ValueError):
            ScanOptions.from_dict({"target_dir": "/data", **payload})

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError):
            ScanOptions.from_dict(["/data"])  # type: ignore[arg-type]

    def test_from_dict_fractional_megabytes(self):
        options = ScanOptions.from_dict({"target_dir": "/data", "min_size_mb": 0.5})
        assert options.min_size_bytes == 512 * 1024


class TestScanResult:
    def test_aggregator_accumulates(self):
        aggregator = ScanAggregator()
        aggregator.add(EntryRecord(name="a", path="/d/a", size=10))
        aggregator.add(EntryRecord(name="e", path="/d/e", size=0, is_dir=True))
        aggregator.add(EntryRecord(name="b", path="/d/b", size=5))
        assert aggregator.matched_count == 3
        result = aggregator.build()

        assert [e.name for e in result.entries] == ["a", "e", "b"]
        assert result.total_size == 15
        assert result.matched_count == 3

    def test_result_is_immutable(self):
        aggregator = ScanAggregator()
        aggregator.add(EntryRecord(name="a", path="/d/a", size=10))
        result = aggregator.build()

        assert isinstance(result.entries, tuple)
        with pytest.raises(AttributeError):
            result.total_size = 0  # type: ignore[misc]
        # Later additions do not leak into a result already built
        aggregator.add(EntryRecord(name="b", path="/d/b", size=5))
        assert result.matched_count == 1
        assert result.total_size == 10

    def test_ids_are_unique(self):
        ids = {EntryRecord(name="a", path="/d/a", size=1).id for _ in range(50)}
        assert len(ids) == 50

    def test_to_dict(self):
        record = EntryRecord(name="a", path="/d/a", size=10, modified_ms=5, id="x")
        result = ScanResult(entries=(record,), total_size=10)
        assert result.to_dict() == {
            "files": [
                {
                    "id": "x",
                    "name": "a",
                    "path": "/d/a",
                    "size": 10,
                    "is_dir": False,
                    "created_ms": None,
                    "modified_ms": 5,
                }
            ],
            "total_size": 10,
        }


class TestDeletionOutcome:
    def test_ok_without_failures(self):
        outcome = DeletionOutcome(deleted=["/a"])
        assert outcome.ok
        assert outcome.summary() == ""

    def test_summary_lists_every_failure(self):
        outcome = DeletionOutcome(
            failures=[DeletionFailure("/a", "denied"), DeletionFailure("/b", "busy")]
        )
        assert not outcome.ok
        lines = outcome.summary().splitlines()
        assert len(lines) == 3
        assert lines[1] == "Failed to delete /a: denied"
        assert lines[2] == "Failed to delete /b: busy"
