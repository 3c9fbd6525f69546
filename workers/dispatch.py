"""
Background dispatch queue.

Runs side-effect jobs (email notifications) on a single worker thread so
the request that produced them never waits for, or fails because of, them.
Job errors are logged and counted, never re-raised.
"""

import queue
import threading
from typing import Callable, Optional

from models import WorkerStats
from utils.logging import get_logger

logger = get_logger(__name__)


class DispatchQueue:
    """Serializes fire-and-forget jobs through one daemon thread."""

    def __init__(self, name: str = "dispatch"):
        self.name = name
        self._queue: queue.Queue = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._lock = threading.Lock()
        self.stats = WorkerStats()

    def start(self):
        """Start the worker thread."""
        with self._lock:
            if self._running:
                return
            self._running = True
            self._thread = threading.Thread(target=self._worker, name=self.name, daemon=True)
            self._thread.start()

    def stop(self, timeout: float = 5.0):
        """Stop the queue, processing remaining jobs first."""
        with self._lock:
            if not self._running:
                return
            self._running = False

        # Signal thread to stop
        self._queue.put(None)

        if self._thread:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("[%s] Worker didn't stop cleanly", self.name)
        self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _worker(self):
        """Worker thread that runs queued jobs."""
        while True:
            try:
                item = self._queue.get(timeout=1.0)
            except queue.Empty:
                if not self._running:
                    break
                continue

            if item is None:
                # Shutdown signal
                self._queue.task_done()
                break

            label, job = item
            self.stats.record_run()
            try:
                job()
                self.stats.record_success()
            except Exception as e:
                logger.warning("[%s] Job %s failed: %s", self.name, label, e)
                self.stats.record_error(str(e))
            finally:
                self._queue.task_done()

    def submit(self, job: Callable[[], None], label: str = "job"):
        """Queue a job (fire and forget)."""
        if not self._running:
            self.start()
        self._queue.put((label, job))

    def flush(self):
        """Wait for all queued jobs to complete."""
        self._queue.join()
