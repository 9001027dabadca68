"""Scan and cleanup orchestration engine."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from send2trash import send2trash

from declutter.core.cleaner import CleanProgressCallback, TrashFunction, remove_paths
from declutter.core.errors import PartialDeletionError
from declutter.core.walker import ScanProgressCallback, scan_tree
from declutter.models.clean_result import DeletionOutcome
from declutter.models.scan_options import ScanOptions
from declutter.models.scan_result import ScanResult

log = logging.getLogger(__name__)


class DeclutterEngine:
    """Runs scans and deletion batches, inline or on a background worker.

    The worker is a single thread, so submitted operations run one at a
    time in submission order and never overlap on the same tree.
    """

    def __init__(self, trash: TrashFunction | None = None) -> None:
        self._trash = trash or send2trash
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def scan(self, options: ScanOptions, on_progress: ScanProgressCallback | None = None) -> ScanResult:
        """Scan ``options.target_dir`` for entries matching every filter.

        Raises:
            InvalidRootError: If the target is missing or not a directory.
        """
        return scan_tree(options, on_progress=on_progress)

    def delete(
        self,
        paths: list[str],
        scan_root: str,
        on_progress: CleanProgressCallback | None = None,
    ) -> DeletionOutcome:
        """Move *paths* to the trash and prune emptied directories.

        Every path is attempted before any error is reported.

        Raises:
            PartialDeletionError: If at least one path could not be deleted.
        """
        outcome = remove_paths(paths, scan_root, on_progress=on_progress, trash=self._trash)
        if not outcome.ok:
            raise PartialDeletionError(outcome.failures, outcome)
        return outcome

    def submit_scan(
        self,
        options: ScanOptions,
        on_progress: ScanProgressCallback | None = None,
    ) -> Future[ScanResult]:
        """Run :meth:`scan` on the background worker."""
        return self._worker().submit(self.scan, options, on_progress)

    def submit_delete(
        self,
        paths: list[str],
        scan_root: str,
        on_progress: CleanProgressCallback | None = None,
    ) -> Future[DeletionOutcome]:
        """Run :meth:`delete` on the background worker."""
        return self._worker().submit(self.delete, list(paths), scan_root, on_progress)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background worker, if one was started."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def _worker(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                log.debug("Starting background worker")
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="declutter")
            return self._executor

    def __enter__(self) -> DeclutterEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
