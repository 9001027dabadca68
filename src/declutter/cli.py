"""CLI interface for Declutter."""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any, Callable

import click

from declutter.core.engine import DeclutterEngine
from declutter.core.errors import InvalidRootError, PartialDeletionError
from declutter.models.clean_result import CleanProgress, DeletionOutcome
from declutter.models.scan_options import ScanOptions, mb_to_bytes
from declutter.models.scan_result import ScanProgress, ScanResult
from declutter.utils import bytes_to_human, format_elapsed, format_timestamp_ms, parse_timestamp_ms


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


class TimestampType(click.ParamType):
    """Epoch milliseconds or an ISO 8601 date."""

    name = "timestamp"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> int:
        if isinstance(value, int):
            return value
        try:
            return parse_timestamp_ms(value)
        except ValueError:
            self.fail(f"{value!r} is neither epoch milliseconds nor an ISO date", param, ctx)


def _filter_options(fn: Callable) -> Callable:
    """Attach the scan filter options shared by ``scan`` and ``clean``."""
    options = [
        click.argument("target", type=click.Path(file_okay=False)),
        click.option("--min-size-mb", type=click.FloatRange(min=0), default=None, help="Minimum file size in MB"),
        click.option("--min-size", "min_size_bytes", type=click.IntRange(min=0), default=None,
                     help="Minimum file size in bytes"),
        click.option("--created-before", type=TimestampType(), default=None,
                     help="Only files created before this date (ISO date or epoch ms)"),
        click.option("--modified-before", type=TimestampType(), default=None,
                     help="Only files modified before this date (ISO date or epoch ms)"),
        click.option("--ext", "-e", "extensions", multiple=True, help="Allowed extension (repeatable)"),
        click.option("--include-empty-dirs", is_flag=True, help="Also match empty directories"),
        click.option("--exclude", "-x", "excluded", multiple=True, type=click.Path(),
                     help="Path never to descend into (repeatable)"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def _build_options(
    target: str,
    min_size_mb: float | None,
    min_size_bytes: int | None,
    created_before: int | None,
    modified_before: int | None,
    extensions: tuple[str, ...],
    include_empty_dirs: bool,
    excluded: tuple[str, ...],
) -> ScanOptions:
    if min_size_bytes is None and min_size_mb is not None:
        min_size_bytes = mb_to_bytes(min_size_mb)
    return ScanOptions(
        target_dir=target,
        min_size_bytes=min_size_bytes,
        created_before_ms=created_before,
        modified_before_ms=modified_before,
        extensions=frozenset(extensions),
        include_empty_dirs=include_empty_dirs,
        excluded=frozenset(excluded),
    )


def _scan_progress_printer(enabled: bool) -> Callable[[ScanProgress], None] | None:
    if not enabled:
        return None

    def on_progress(progress: ScanProgress) -> None:
        if progress.done:
            click.echo(f"  scanned {progress.scanned_count:,} entries, {progress.matched_count:,} matched", err=True)
        else:
            click.echo(f"  {progress.scanned_count:,} scanned · {progress.current_path}", err=True)

    return on_progress


def _clean_progress_printer(enabled: bool) -> Callable[[CleanProgress], None] | None:
    if not enabled:
        return None

    def on_progress(progress: CleanProgress) -> None:
        click.echo(f"  [{progress.current}/{progress.total}] {progress.current_path}", err=True)

    return on_progress


def _run_scan(options: ScanOptions, verbose: bool) -> ScanResult:
    try:
        return DeclutterEngine().scan(options, on_progress=_scan_progress_printer(verbose))
    except InvalidRootError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _print_entries(result: ScanResult) -> None:
    for entry in result.entries:
        if entry.is_dir:
            size_str = click.style("empty dir", fg="bright_black")
        else:
            size_str = click.style(bytes_to_human(entry.size), fg="green", bold=True)
        modified = format_timestamp_ms(entry.modified_ms)
        click.echo(f"  {size_str:>20s}  {modified}  {entry.path}")


def _print_outcome(outcome: DeletionOutcome) -> None:
    for path in outcome.deleted:
        click.echo(f"  {click.style('✓', fg='green')} {path}")
    for path in outcome.skipped:
        click.echo(f"  {click.style('·', fg='bright_black')} {path} — already gone")
    for failure in outcome.failures:
        click.echo(f"  {click.style('✗', fg='red')} {failure.path} — {failure.message}")
    if outcome.pruned:
        click.echo(f"\n  Removed {len(outcome.pruned)} empty director{'y' if len(outcome.pruned) == 1 else 'ies'}")


def _run_delete(paths: list[str], root: str, as_json: bool, verbose: bool) -> None:
    engine = DeclutterEngine()
    try:
        outcome = engine.delete(paths, root, on_progress=_clean_progress_printer(verbose and not as_json))
        error = None
    except PartialDeletionError as exc:
        outcome = exc.outcome or DeletionOutcome(failures=exc.failures)
        error = str(exc)

    if as_json:
        click.echo(json.dumps({**outcome.to_dict(), "error": error}, indent=2))
    else:
        _print_outcome(outcome)
        click.echo(f"\nMoved {len(outcome.deleted):,} item(s) to the trash.\n")

    if error is not None:
        if not as_json:
            click.echo(error, err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.pass_context
def main(ctx: click.Context, verbose: int) -> None:
    """Declutter — find and trash files matching size, age and type filters."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# ── scan ─────────────────────────────────────────────────────────────────

@main.command()
@_filter_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def scan(ctx: click.Context, as_json: bool, **filters: Any) -> None:
    """Scan TARGET for matching files (preview only, never deletes)."""
    options = _build_options(**filters)
    verbose = bool(ctx.obj["verbose"]) and not as_json

    start = time.monotonic()
    result = _run_scan(options, verbose)
    elapsed = time.monotonic() - start

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.entries:
        click.echo("No matching files.")
        return

    click.echo()
    _print_entries(result)
    click.echo(
        f"\n{result.matched_count:,} item(s), "
        f"{click.style(bytes_to_human(result.total_size), fg='green', bold=True)} "
        f"in {format_elapsed(elapsed)}\n"
    )


# ── clean ────────────────────────────────────────────────────────────────

@main.command()
@_filter_options
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--dry-run", is_flag=True, help="Show what would be deleted without doing it")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def clean(ctx: click.Context, yes: bool, dry_run: bool, as_json: bool, **filters: Any) -> None:
    """Scan TARGET and move every match to the trash."""
    options = _build_options(**filters)
    verbose = bool(ctx.obj["verbose"]) and not as_json
    result = _run_scan(options, verbose)

    if not result.entries:
        if as_json:
            click.echo(json.dumps({"status": "nothing_to_clean", "files": []}))
        else:
            click.echo("Nothing to clean.")
        return

    if dry_run:
        if as_json:
            click.echo(json.dumps({"status": "dry_run", **result.to_dict()}, indent=2))
        else:
            click.echo()
            _print_entries(result)
            click.echo(f"\nWould free {bytes_to_human(result.total_size)} (dry run — nothing was deleted)")
        return

    if not as_json:
        click.echo()
        _print_entries(result)
        click.echo(f"\nTotal: {click.style(bytes_to_human(result.total_size), fg='green', bold=True)}\n")

    if not yes and not as_json:
        if not click.confirm(f"Move {result.matched_count:,} item(s) to the trash?", default=False):
            click.echo("Aborted.")
            return

    _run_delete([e.path for e in result.entries], options.target_dir, as_json, verbose)


# ── delete ───────────────────────────────────────────────────────────────

@main.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.argument("paths", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def delete(ctx: click.Context, root: str, paths: tuple[str, ...], as_json: bool) -> None:
    """Move PATHS to the trash, pruning emptied directories below ROOT."""
    _run_delete(list(paths), root, as_json, bool(ctx.obj["verbose"]))


# ── service ──────────────────────────────────────────────────────────────

@main.group()
def service() -> None:
    """D-Bus service management."""


@service.command("start")
def service_start() -> None:
    """Start the D-Bus service in foreground."""
    from declutter.dbus_service import start_service

    click.echo("Starting Declutter D-Bus service...")
    start_service()
