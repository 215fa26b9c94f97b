from __future__ import annotations

import logging
import threading
from typing import Optional

from .service import SyncService

logger = logging.getLogger(__name__)


class SyncScheduler:
    """Background polling: run a soft sync every ``interval_seconds``."""

    def __init__(self, sync_service: SyncService, *, interval_seconds: float):
        self._sync = sync_service
        self._interval = float(interval_seconds)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="hour-bank-sync-scheduler", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self._sync.sync()
            except Exception:
                logger.exception("periodic sync failed")
            self._stop.wait(self._interval)
