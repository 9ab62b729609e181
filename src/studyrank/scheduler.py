"""Periodic priority refresh.

Scores depend on the current time, so a running session re-scores the
whole schedule on a fixed interval and hands the result to a renderer.
"""

import logging
from datetime import datetime
from typing import Callable

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .core.activities import Activity
from .ports import ActivityStore
from .workflows import refresh_store

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[list[Activity]], None]


def refresh_job(
    store: ActivityStore,
    on_refresh: RefreshCallback | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> list[Activity]:
    """One tick: re-score with the current instant, save, render."""
    now = clock()
    activities = refresh_store(store, now)
    logger.info(f"Refreshed {len(activities)} activities at {now:%H:%M:%S}")
    if on_refresh:
        on_refresh(activities)
    return activities


def setup_scheduler(
    store: ActivityStore,
    interval_seconds: int = 60,
    on_refresh: RefreshCallback | None = None,
    scheduler: BlockingScheduler | None = None,
) -> BlockingScheduler:
    """Set up the refresh job on a scheduler (not started)."""
    if interval_seconds < 1:
        raise ValueError(f"Refresh interval must be at least 1 second, got {interval_seconds}")

    scheduler = scheduler or BlockingScheduler()
    scheduler.add_job(
        refresh_job,
        IntervalTrigger(seconds=interval_seconds),
        args=[store, on_refresh],
        id="priority_refresh",
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"Scheduled priority refresh every {interval_seconds}s")
    return scheduler
