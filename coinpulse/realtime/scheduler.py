"""
Scheduler for per-subscriber broadcast jobs.

Wraps an APScheduler ``AsyncIOScheduler`` running on the application's
event loop. Each connected subscriber owns exactly one interval job;
the job is removed when the subscriber disconnects.

Jobs never overlap with themselves (``max_instances=1``) and missed runs
collapse into one (``coalesce=True``), so a slow provider call delays
only its own subscriber's next push.
"""

import logging
from typing import Any, Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


class BroadcastScheduler:
    """Owns the interval jobs that drive the live broadcast.

    Usage:
        scheduler = BroadcastScheduler(interval_seconds=10)
        scheduler.start()                       # inside a running event loop
        scheduler.schedule("job-1", tick, sub)  # run tick(sub) every 10s
        scheduler.cancel("job-1")
        scheduler.stop()
    """

    def __init__(self, interval_seconds: float) -> None:
        self._interval = interval_seconds
        self._scheduler = AsyncIOScheduler(
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": max(1, int(interval_seconds)),
            },
        )

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._scheduler.running

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start dispatching jobs. Must be called from a running event loop."""
        if self._scheduler.running:
            logger.warning("Broadcast scheduler already running.")
            return
        self._scheduler.start()
        logger.info("Broadcast scheduler started (interval=%ss).", self._interval)

    def stop(self) -> None:
        """Stop dispatching and drop every remaining job."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        logger.info("Broadcast scheduler stopped.")

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def schedule(self, job_id: str, func: Callable[..., Any], *args: Any) -> None:
        """Run ``func(*args)`` every interval, first run one interval from now."""
        self._scheduler.add_job(
            func,
            IntervalTrigger(seconds=self._interval),
            id=job_id,
            name=job_id,
            args=list(args),
            replace_existing=True,
        )
        logger.debug("Scheduled broadcast job %s", job_id)

    def cancel(self, job_id: str) -> bool:
        """Remove a job. Returns False if it was already gone."""
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            return False
        logger.debug("Cancelled broadcast job %s", job_id)
        return True

    def has_job(self, job_id: str) -> bool:
        return self._scheduler.get_job(job_id) is not None

    # ------------------------------------------------------------------
    # Status & introspection
    # ------------------------------------------------------------------

    def get_scheduled_jobs(self) -> list[dict]:
        """Return info about all scheduled jobs."""
        return [
            {
                "id": job.id,
                "next_run": str(getattr(job, "next_run_time", None)),
                "trigger": str(job.trigger),
            }
            for job in self._scheduler.get_jobs()
        ]

    def get_status(self) -> dict:
        return {
            "running": self.is_running,
            "interval_seconds": self._interval,
            "jobs": self.get_scheduled_jobs(),
        }
