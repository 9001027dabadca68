"""Inclusion rules applied to every classified entry.

Each rule is an independent predicate over a :class:`Candidate` and the
scan options. Rules that do not apply to a kind of entry pass it, so the
rules can simply be AND-ed together.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable

from declutter.models.scan_options import ScanOptions


@dataclass(frozen=True, slots=True)
class Candidate:
    """Typed view of an entry under consideration."""

    name: str
    path: str
    size: int
    is_dir: bool = False
    created_ms: int | None = None
    modified_ms: int | None = None
    is_empty: bool = False

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot; '' when there is none."""
        return os.path.splitext(self.name)[1].lstrip(".").lower()


FilterRule = Callable[[Candidate, ScanOptions], bool]


def min_size_rule(candidate: Candidate, options: ScanOptions) -> bool:
    if candidate.is_dir or options.min_size_bytes is None:
        return True
    return candidate.size >= options.min_size_bytes


def extension_rule(candidate: Candidate, options: ScanOptions) -> bool:
    if candidate.is_dir or not options.extensions:
        return True
    return candidate.extension in options.extensions


def created_before_rule(candidate: Candidate, options: ScanOptions) -> bool:
    # An unknown timestamp cannot be compared and does not exclude.
    if candidate.is_dir or options.created_before_ms is None or candidate.created_ms is None:
        return True
    return candidate.created_ms < options.created_before_ms


def modified_before_rule(candidate: Candidate, options: ScanOptions) -> bool:
    if candidate.is_dir or options.modified_before_ms is None or candidate.modified_ms is None:
        return True
    return candidate.modified_ms < options.modified_before_ms


def directory_rule(candidate: Candidate, options: ScanOptions) -> bool:
    if not candidate.is_dir:
        return True
    return options.include_empty_dirs and candidate.is_empty


FILTER_RULES: tuple[FilterRule, ...] = (
    min_size_rule,
    extension_rule,
    created_before_rule,
    modified_before_rule,
    directory_rule,
)


def matches(candidate: Candidate, options: ScanOptions, rules: tuple[FilterRule, ...] = FILTER_RULES) -> bool:
    """Check *candidate* against every rule."""
    return all(rule(candidate, options) for rule in rules)
