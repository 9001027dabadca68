"""Shared utility functions."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


def emit(callback: Callable[[T], None] | None, event: T) -> None:
    """Deliver a progress event, ignoring any failure of the receiver."""
    if callback is None:
        return
    try:
        callback(event)
    except Exception:
        log.debug("Progress callback failed for %r", event, exc_info=True)


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"


def parse_timestamp_ms(value: str) -> int:
    """Parse epoch milliseconds or an ISO 8601 date/datetime.

    Naive ISO values are interpreted as UTC.

    Raises:
        ValueError: If *value* is neither form.
    """
    value = value.strip()
    if value.isdigit():
        return int(value)
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def format_timestamp_ms(value: int | None) -> str:
    """Format epoch milliseconds as a short local date, '-' when unknown."""
    if value is None:
        return "-"
    return datetime.fromtimestamp(value / 1000).strftime("%Y-%m-%d %H:%M")
