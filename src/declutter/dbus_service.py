"""D-Bus service for GUI communication.

D-Bus methods use PascalCase per D-Bus convention, and type signatures
like "as" and "(ttsb)" are D-Bus protocol types, not Python syntax.
"""

from __future__ import annotations

import asyncio
import json
import logging

from dbus_next.aio import MessageBus
from dbus_next.service import ServiceInterface, method, signal
from dbus_next import BusType

from declutter.core.engine import DeclutterEngine
from declutter.core.errors import InvalidRootError, PartialDeletionError
from declutter.models.clean_result import CleanProgress, DeletionOutcome
from declutter.models.scan_options import ScanOptions
from declutter.models.scan_result import ScanProgress

log = logging.getLogger(__name__)

_BUS_NAME = "io.github.declutter"
_OBJECT_PATH = "/io/github/declutter"
_INTERFACE = "io.github.declutter.Manager"


# noinspection PyPep8Naming
class DeclutterDBusService(ServiceInterface):
    """D-Bus service interface for Declutter."""

    def __init__(self, engine: DeclutterEngine | None = None) -> None:
        super().__init__(_INTERFACE)
        self._engine = engine or DeclutterEngine()

    @method()
    async def Scan(self, options_json: "s") -> "s":  # type: ignore[override]
        """Scan with the given JSON options, returning the result as JSON."""
        return await self.scan(options_json)

    @method()
    async def Delete(self, paths: "as", scan_root: "s") -> "s":  # type: ignore[override]
        """Move paths to the trash, returning the outcome as JSON."""
        return await self.delete(list(paths), scan_root)

    async def scan(self, options_json: str) -> str:
        """Run a scan on the engine worker, relaying progress as signals."""
        try:
            options = ScanOptions.from_dict(json.loads(options_json))
        except (json.JSONDecodeError, TypeError, ValueError) as exc:
            return json.dumps({"error": f"Bad options: {exc}"})

        loop = asyncio.get_running_loop()

        def progress(p: ScanProgress) -> None:
            loop.call_soon_threadsafe(self.ScanProgress, p.scanned_count, p.matched_count, p.current_path, p.done)

        try:
            result = await asyncio.wrap_future(self._engine.submit_scan(options, on_progress=progress))
        except InvalidRootError as exc:
            return json.dumps({"error": str(exc)})
        return json.dumps(result.to_dict())

    async def delete(self, paths: list[str], scan_root: str) -> str:
        """Run a deletion batch on the engine worker, relaying progress as signals."""
        loop = asyncio.get_running_loop()

        def progress(p: CleanProgress) -> None:
            loop.call_soon_threadsafe(self.CleanProgress, p.total, p.current, p.current_path)

        try:
            outcome = await asyncio.wrap_future(self._engine.submit_delete(paths, scan_root, on_progress=progress))
        except PartialDeletionError as exc:
            outcome = exc.outcome or DeletionOutcome(failures=exc.failures)
            return json.dumps({**outcome.to_dict(), "error": str(exc)})
        return json.dumps({**outcome.to_dict(), "error": None})

    def close(self) -> None:
        """Stop the engine worker."""
        self._engine.shutdown()

    @signal()
    def ScanProgress(
        self, scanned_count: int, matched_count: int, current_path: str, done: bool
    ) -> "(ttsb)":  # type: ignore[override]
        return [scanned_count, matched_count, current_path, done]

    @signal()
    def CleanProgress(self, total: int, current: int, current_path: str) -> "(tts)":  # type: ignore[override]
        return [total, current, current_path]


async def run_service() -> None:
    """Start the D-Bus service."""
    bus = await MessageBus(bus_type=BusType.SESSION).connect()
    service = DeclutterDBusService()
    bus.export(_OBJECT_PATH, service)
    await bus.request_name(_BUS_NAME)
    log.info("D-Bus service started on %s", _BUS_NAME)
    try:
        await bus.wait_for_disconnect()
    finally:
        service.close()


def start_service() -> None:
    """Entry point to start the D-Bus service."""
    asyncio.run(run_service())
