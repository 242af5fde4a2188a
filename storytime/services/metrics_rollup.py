# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from storytime.models.metric_bucket import MetricBucket, MetricPeriod
from storytime.models.story import Story
from storytime.utils.time_utils import get_app_timezone, to_naive_utc

logger = logging.getLogger(__name__)


class RollupPeriodOpen(ValueError):
    """The requested day or week has not ended yet."""


def _local_day_start_utc(day: date, tz) -> datetime:
    return to_naive_utc(tz.localize(datetime(day.year, day.month, day.day)))


def _rollup(db: Session, period: MetricPeriod, first_day: date, days: int, tz=None, now=None) -> MetricBucket:
    tz = tz or get_app_timezone()

    # Buckets are never rewritten, so only closed periods may be bucketed
    last_closed_day = previous_local_day(now, tz)
    if first_day + timedelta(days=days - 1) > last_closed_day:
        raise RollupPeriodOpen(
            f"{period.value} period starting {first_day} has not ended yet (last closed day is {last_closed_day})"
        )

    start = _local_day_start_utc(first_day, tz)
    end = _local_day_start_utc(first_day + timedelta(days=days), tz)

    existing = db.query(MetricBucket).filter(
        MetricBucket.period == period,
        MetricBucket.timestamp == start
    ).first()
    if existing:
        logger.info(f"⏭️ {period.value} bucket for {first_day} already exists, skipping.")
        return existing

    stories = db.query(Story).filter(
        Story.created_at >= start,
        Story.created_at < end
    ).all()

    domain_counts = Counter()
    emotion_total = 0
    for story in stories:
        domain_counts[story.domain.value] += 1
        emotion_total += story.emotion_score or 0

    bucket = MetricBucket(
        period=period,
        totals_by_domain=dict(domain_counts),
        total_stories=len(stories),
        total_emotion_score=emotion_total,
        timestamp=start,
    )
    db.add(bucket)
    db.commit()
    db.refresh(bucket)

    logger.info(f"📈 Rolled up {len(stories)} stories into {period.value} bucket for {first_day}.")
    return bucket


def rollup_daily_metrics(db: Session, day: date, tz=None, now: Optional[datetime] = None) -> MetricBucket:
    """Writes the daily bucket for a finished calendar day, once."""
    return _rollup(db, MetricPeriod.daily, day, 1, tz, now)


def week_start_for(day: date) -> date:
    return day - timedelta(days=(day.weekday() + 1) % 7)


def rollup_weekly_metrics(db: Session, week_start: date, tz=None, now: Optional[datetime] = None) -> MetricBucket:
    """Writes the bucket for the finished Sunday-aligned week containing week_start."""
    return _rollup(db, MetricPeriod.weekly, week_start_for(week_start), 7, tz, now)


def previous_local_day(now: Optional[datetime] = None, tz=None) -> date:
    tz = tz or get_app_timezone()
    local_now = now.astimezone(tz) if now is not None else datetime.now(tz)
    return local_now.date() - timedelta(days=1)
