"""
Worker models - shared by background dispatch queues.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class WorkerStats(BaseModel):
    """
    Statistics for a background worker.

    The notification queue records one run per job it picks up.
    """
    runs: int = 0
    successes: int = 0
    errors: int = 0
    items_skipped: int = 0

    # Timing
    last_run: Optional[datetime] = None
    last_success: Optional[datetime] = None
    last_error: Optional[datetime] = None
    last_error_message: Optional[str] = None

    def record_run(self) -> None:
        """Record a job pickup."""
        self.runs += 1
        self.last_run = datetime.now()

    def record_success(self) -> None:
        """Record a delivered job."""
        self.successes += 1
        self.last_success = datetime.now()

    def record_error(self, message: str = None) -> None:
        """Record a failed job."""
        self.errors += 1
        self.last_error = datetime.now()
        self.last_error_message = message

    def record_skip(self) -> None:
        """Record a job dropped because the sink is disabled."""
        self.items_skipped += 1

    @property
    def success_rate(self) -> float:
        """Successful runs as a fraction of all runs."""
        if self.runs == 0:
            return 0.0
        return self.successes / self.runs

    @property
    def is_healthy(self) -> bool:
        """Check if worker is healthy (low error rate)."""
        if self.runs < 3:
            return True  # Not enough data
        return self.success_rate > 0.5

    def to_dict(self) -> dict:
        """Export for API responses."""
        return {
            "runs": self.runs,
            "successes": self.successes,
            "errors": self.errors,
            "skipped": self.items_skipped,
            "last_run": self.last_run.isoformat() if self.last_run else None,
            "last_error": self.last_error_message,
            "healthy": self.is_healthy,
        }
