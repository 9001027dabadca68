"""Scan configuration dataclass."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Iterable

_BYTES_PER_MB = 1024 * 1024


def mb_to_bytes(mb: int | float) -> int:
    """Convert a megabyte threshold to bytes."""
    return int(mb * _BYTES_PER_MB)


def _normalize_extensions(extensions: Iterable[str] | None) -> frozenset[str]:
    if not extensions:
        return frozenset()
    return frozenset(ext.strip().lstrip(".").lower() for ext in extensions)


def _normalize_paths(paths: Iterable[str] | None) -> frozenset[str]:
    if not paths:
        return frozenset()
    return frozenset(os.path.abspath(p) for p in paths)


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Filter criteria for a single scan.

    Every filter is optional and the configured ones are combined with
    AND semantics. Timestamps are exclusive upper bounds in epoch
    milliseconds. ``excluded`` holds absolute paths the walker never
    visits or descends into.
    """

    target_dir: str
    min_size_bytes: int | None = None
    created_before_ms: int | None = None
    modified_before_ms: int | None = None
    extensions: frozenset[str] = field(default_factory=frozenset)
    include_empty_dirs: bool = False
    excluded: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "target_dir", os.path.abspath(self.target_dir))
        object.__setattr__(self, "extensions", _normalize_extensions(self.extensions))
        object.__setattr__(self, "excluded", _normalize_paths(self.excluded))
        if self.min_size_bytes is not None and self.min_size_bytes < 0:
            raise ValueError(f"Minimum size must not be negative, got {self.min_size_bytes}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScanOptions:
        """Build options from a JSON-style payload.

        Accepts ``min_size_mb`` (megabytes) or ``min_size_bytes``, and
        ``whitelist`` as an alias of ``excluded``. Optional keys may be
        absent or null.

        Raises:
            ValueError: If ``target_dir`` is missing or a value has the
                wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError("options must be a JSON object")

        target = data.get("target_dir")
        if not target or not isinstance(target, str):
            raise ValueError("target_dir is required and must be a string")

        min_size = _optional_number(data, "min_size_bytes")
        min_size_mb = _optional_number(data, "min_size_mb")
        if min_size is None and min_size_mb is not None:
            min_size = mb_to_bytes(min_size_mb)

        excluded_key = "excluded" if data.get("excluded") is not None else "whitelist"

        include_empty_dirs = data.get("include_empty_dirs")
        if include_empty_dirs is None:
            include_empty_dirs = False
        elif not isinstance(include_empty_dirs, bool):
            raise ValueError(f"include_empty_dirs must be a boolean, got {include_empty_dirs!r}")

        return cls(
            target_dir=target,
            min_size_bytes=int(min_size) if min_size is not None else None,
            created_before_ms=_optional_int(data, "created_before_ms"),
            modified_before_ms=_optional_int(data, "modified_before_ms"),
            extensions=frozenset(_string_list(data, "extensions")),
            include_empty_dirs=include_empty_dirs,
            excluded=frozenset(_string_list(data, excluded_key)),
        )


def _optional_number(data: dict[str, Any], key: str) -> int | float | None:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    return value


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{key} must be a list of strings, got {value!r}")
    return value
