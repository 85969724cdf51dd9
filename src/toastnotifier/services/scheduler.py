"""Shared APScheduler instance for one-off deadlines.

Cancellation deadlines are ``date`` jobs on a lazily started
BackgroundScheduler, so they fire on the scheduler's worker thread.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

_scheduler: BackgroundScheduler | None = None


def get_scheduler() -> BackgroundScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = BackgroundScheduler(timezone="UTC")
        _scheduler.start()
    return _scheduler


def schedule_once(delay: timedelta, func: Callable[..., Any], **kwargs: Any) -> Job:
    """Run ``func`` once after ``delay`` and return the job handle."""
    run_date = datetime.now(timezone.utc) + max(delay, timedelta(0))
    return get_scheduler().add_job(func, "date", run_date=run_date, kwargs=kwargs, misfire_grace_time=None)


def cancel_job(job: Job) -> None:
    """Remove a pending job; jobs that already ran are gone and ignored."""
    try:
        job.remove()
    except JobLookupError:
        pass


def shutdown_scheduler() -> None:
    global _scheduler
    if _scheduler and _scheduler.running:
        _scheduler.shutdown(wait=False)
    _scheduler = None
