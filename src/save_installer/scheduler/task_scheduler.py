"""
Task Scheduler

APScheduler integration for the startup sweep and optional periodic sweeps.

Author: Save Game Installer Project
License: MIT
"""

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger
from typing import Callable, Optional
from datetime import datetime, timezone

from ..utils.logger import get_logger
from ..config.schema import Config

logger = get_logger(__name__)


def cron_trigger(expression: str) -> Optional[CronTrigger]:
    """
    Build a trigger from a five-field cron expression.

    Format: "minute hour day month day_of_week". Returns None when the
    expression is malformed.
    """
    if len(expression.split()) != 5:
        logger.error(f"Invalid cron expression: {expression}")
        return None

    try:
        return CronTrigger.from_crontab(expression)
    except ValueError as e:
        logger.error(f"Invalid cron expression {expression}: {e}")
        return None


class TaskScheduler:
    """
    Manages scheduled sweeps.

    - One-shot startup sweep
    - Periodic full sweep from ``scheduling.periodic_sweep``
    """

    def __init__(self, config: Config):
        """
        Initialize task scheduler.

        Args:
            config: Configuration object
        """
        self.config = config
        self.scheduler = BackgroundScheduler(
            job_defaults={
                'coalesce': True,  # Combine missed executions
                'max_instances': 1  # Only one instance per job
            }
        )

        logger.debug("TaskScheduler initialized")

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self):
        """Start the scheduler."""
        if self.scheduler.running:
            logger.warning("Scheduler already running")
            return

        self.scheduler.start()
        logger.info("Scheduler started")

    def stop(self):
        """Stop the scheduler."""
        if not self.scheduler.running:
            return

        self.scheduler.shutdown(wait=True)
        logger.info("Scheduler stopped")

    def add_startup_job(self, callback: Callable[[], None]):
        """
        Run the startup sweep once, as soon as the scheduler starts.

        Args:
            callback: Function running the sweep
        """
        self.scheduler.add_job(
            func=self._run_job,
            args=("startup", callback),
            trigger=DateTrigger(run_date=datetime.now(timezone.utc)),
            id='startup_sweep',
            name='Startup Sweep',
            # Runs however late the scheduler is started
            misfire_grace_time=None,
            replace_existing=True
        )
        logger.debug("Added startup sweep job")

    def add_periodic_sweep_job(self, callback: Callable[[], None]) -> bool:
        """
        Add the periodic sweep job based on configuration.

        Args:
            callback: Function running the sweep

        Returns:
            True if a job was scheduled
        """
        cron_expr = self.config.scheduling.periodic_sweep
        if not cron_expr:
            logger.debug("No periodic sweep configured")
            return False

        trigger = cron_trigger(cron_expr)
        if trigger is None:
            return False

        self.scheduler.add_job(
            func=self._run_job,
            args=("periodic", callback),
            trigger=trigger,
            id='periodic_sweep',
            name='Periodic Sweep',
            replace_existing=True
        )
        logger.info(f"Added periodic sweep job with schedule: {cron_expr}")
        return True

    def _run_job(self, name: str, callback: Callable[[], None]):
        logger.info(f"Executing scheduled {name} sweep")
        try:
            callback()
        except Exception as e:
            logger.error(f"Error in {name} sweep: {e}")

    def get_jobs(self) -> list:
        """
        Get list of scheduled jobs.

        Returns:
            List of job information dictionaries
        """
        jobs = []

        for job in self.scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)

            jobs.append({
                'id': job.id,
                'name': job.name,
                'next_run': next_run.isoformat() if next_run else None,
                'trigger': str(job.trigger)
            })

        return jobs
