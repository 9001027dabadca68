"""Tests for entry classification."""

from __future__ import annotations

import os

from declutter.core.classifier import classify, is_effectively_empty, is_system_artifact


class TestSystemArtifacts:
    def test_known_names_any_case(self):
        assert is_system_artifact(".DS_Store")
        assert is_system_artifact(".ds_store")
        assert is_system_artifact("Thumbs.db")
        assert is_system_artifact("THUMBS.DB")

    def test_regular_names(self):
        assert not is_system_artifact("notes.txt")
        assert not is_system_artifact("DS_Store")


class TestClassify:
    def test_file(self, tmp_path, make_file):
        path = make_file(tmp_path / "a.bin", 123, mtime_ms=1_600_000_000_123)
        info = classify(str(path))
        assert info is not None
        assert not info.is_dir
        assert not info.is_symlink
        assert info.size == 123
        assert info.modified_ms == 1_600_000_000_123

    def test_directory_has_zero_size(self, tmp_path):
        info = classify(str(tmp_path))
        assert info is not None
        assert info.is_dir
        assert info.size == 0

    def test_symlink_is_not_followed(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        link = tmp_path / "link"
        os.symlink(target, link)

        info = classify(str(link))
        assert info is not None
        assert info.is_symlink
        assert not info.is_dir

    def test_missing_entry_is_unreadable(self, tmp_path):
        assert classify(str(tmp_path / "gone")) is None


class TestEffectivelyEmpty:
    def test_truly_empty(self, tmp_path):
        assert is_effectively_empty(str(tmp_path))

    def test_only_artifacts(self, tmp_path, make_file):
        make_file(tmp_path / ".DS_Store")
        make_file(tmp_path / "thumbs.db")
        assert is_effectively_empty(str(tmp_path))

    def test_real_content(self, tmp_path, make_file):
        make_file(tmp_path / ".DS_Store")
        make_file(tmp_path / "keep.txt")
        assert not is_effectively_empty(str(tmp_path))

    def test_empty_subdirectory_counts_as_content(self, tmp_path):
        (tmp_path / "sub").mkdir()
        assert not is_effectively_empty(str(tmp_path))

    def test_unreadable_is_not_empty(self, tmp_path):
        assert not is_effectively_empty(str(tmp_path / "missing"))
