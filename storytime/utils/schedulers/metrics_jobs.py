# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
import time
from datetime import timedelta
from sqlalchemy.orm import Session
from storytime.models.database import SessionLocal
from storytime.services.metrics_rollup import (
    rollup_daily_metrics,
    rollup_weekly_metrics,
    previous_local_day,
    week_start_for,
)

logger = logging.getLogger("scheduler")


def _run_job(name, func):
    db: Session = SessionLocal()
    start = time.time()
    try:
        logger.info(f"🔹 Running job: {name}")
        func(db)
        duration = round(time.time() - start, 2)
        logger.info(f"✅ Completed {name} in {duration} sec.")
    except Exception as e:
        db.rollback()
        logger.error(f"🛑 {name} failed: {e}", exc_info=True)
    finally:
        db.close()


def run_daily_rollup():
    """Buckets yesterday's stories. Runs just after local midnight."""
    day = previous_local_day()
    _run_job(f"DailyMetrics[{day}]", lambda db: rollup_daily_metrics(db, day))


def run_weekly_rollup():
    """Buckets the week that ended yesterday. Runs early on Sunday."""
    last_week_start = week_start_for(previous_local_day())
    _run_job(f"WeeklyMetrics[{last_week_start}]", lambda db: rollup_weekly_metrics(db, last_week_start))
