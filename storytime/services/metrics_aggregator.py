# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional

from storytime.services.snapshots import MetricSnapshot
from storytime.utils.time_utils import get_app_timezone

logger = logging.getLogger(__name__)

UNAVAILABLE = "N/A"


@dataclass
class MetricsSummary:
    totals_by_domain: Dict[str, int] = field(default_factory=dict)
    total_stories: int = 0
    total_emotion_score: int = 0
    stories_today: int = 0
    stories_this_week: int = 0
    bucket_count: int = 0

    @property
    def average_emotion_score(self) -> Optional[float]:
        """None when there is nothing to average."""
        if self.total_stories <= 0:
            return None
        return self.total_emotion_score / self.total_stories

    def average_emotion_score_display(self) -> str:
        average = self.average_emotion_score
        if average is None:
            return UNAVAILABLE
        return f"{average:.2f}"

    def to_dict(self) -> dict:
        return {
            "totals_by_domain": dict(self.totals_by_domain),
            "total_stories": self.total_stories,
            "total_emotion_score": self.total_emotion_score,
            "average_emotion_score": self.average_emotion_score_display(),
            "stories_today": self.stories_today,
            "stories_this_week": self.stories_this_week,
            "bucket_count": self.bucket_count,
        }


def day_and_week_start(now: Optional[datetime] = None, tz=None):
    """
    Start of the current calendar day and of the Sunday-aligned week
    containing it, both as aware datetimes in tz.
    """
    tz = tz or get_app_timezone()
    local_now = now.astimezone(tz) if now is not None else datetime.now(tz)

    today = local_now.date()
    # Python weekday(): Monday=0 .. Sunday=6
    days_since_sunday = (today.weekday() + 1) % 7
    week_start = today - timedelta(days=days_since_sunday)

    start_of_today = tz.localize(datetime(today.year, today.month, today.day))
    start_of_week = tz.localize(datetime(week_start.year, week_start.month, week_start.day))
    return start_of_today, start_of_week


def aggregate_metrics(
    records: Iterable[MetricSnapshot],
    now: Optional[datetime] = None,
    tz=None,
) -> MetricsSummary:
    """
    Folds metric buckets into dashboard totals.

    Domain keys are summed by exact string match. Missing counts count as
    zero, and records without a timestamp only feed the grand totals.
    """
    start_of_today, start_of_week = day_and_week_start(now, tz)

    by_domain = defaultdict(int)
    summary = MetricsSummary()

    for record in records:
        for domain, count in (record.totals_by_domain or {}).items():
            by_domain[domain] += int(count or 0)

        stories = int(record.total_stories or 0)
        summary.total_stories += stories
        summary.total_emotion_score += int(record.total_emotion_score or 0)
        summary.bucket_count += 1

        if record.timestamp is None:
            continue
        if record.timestamp >= start_of_today:
            summary.stories_today += stories
        if record.timestamp >= start_of_week:
            summary.stories_this_week += stories

    summary.totals_by_domain = dict(by_domain)
    logger.debug(
        f"📊 Aggregated {summary.bucket_count} buckets: {summary.total_stories} stories, "
        f"{summary.stories_today} today, {summary.stories_this_week} this week"
    )
    return summary
