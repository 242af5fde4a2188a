"""
Tests for writing append-only daily / weekly metric buckets.
"""

from datetime import date, datetime

import pytest
import pytz

from storytime.models.metric_bucket import MetricBucket, MetricPeriod
from storytime.models.story import Story, StoryDomain
from storytime.models.user import User
from storytime.services.metrics_rollup import (
    RollupPeriodOpen,
    previous_local_day,
    rollup_daily_metrics,
    rollup_weekly_metrics,
    week_start_for,
)

# Monday after the seeded week, so every seeded day has ended
NOW = datetime(2026, 10, 26, 12, 0, tzinfo=pytz.utc)


def _seed(db):
    db.add(User(uid="writer"))
    db.add_all([
        Story(author_uid="writer", text="happy day", emotion_score=4,
              domain=StoryDomain.health, created_at=datetime(2026, 10, 17, 10, 0)),
        Story(author_uid="writer", text="sad day", emotion_score=2,
              domain=StoryDomain.personal, created_at=datetime(2026, 10, 17, 22, 0)),
        Story(author_uid="writer", text="plain day", emotion_score=3,
              domain=StoryDomain.health, created_at=datetime(2026, 10, 18, 1, 0)),
    ])
    db.commit()


class TestDailyRollup:

    def test_counts_one_day(self, db):
        _seed(db)
        bucket = rollup_daily_metrics(db, date(2026, 10, 17), tz=pytz.utc, now=NOW)

        assert bucket.period == MetricPeriod.daily
        assert bucket.totals_by_domain == {"health": 1, "personal": 1}
        assert bucket.total_stories == 2
        assert bucket.total_emotion_score == 6
        assert bucket.timestamp == datetime(2026, 10, 17)

    def test_bucket_is_written_once(self, db):
        _seed(db)
        first = rollup_daily_metrics(db, date(2026, 10, 17), tz=pytz.utc, now=NOW)

        db.add(Story(author_uid="writer", text="late", emotion_score=5,
                     domain=StoryDomain.legal, created_at=datetime(2026, 10, 17, 23, 0)))
        db.commit()
        second = rollup_daily_metrics(db, date(2026, 10, 17), tz=pytz.utc, now=NOW)

        assert second.id == first.id
        assert second.total_stories == 2
        assert db.query(MetricBucket).count() == 1

    def test_empty_day(self, db):
        bucket = rollup_daily_metrics(db, date(2026, 1, 1), tz=pytz.utc, now=NOW)
        assert bucket.total_stories == 0
        assert bucket.totals_by_domain == {}

    def test_day_boundary_uses_timezone(self, db):
        _seed(db)
        # 2026-10-18 01:00 UTC is still 10-17 in New York
        bucket = rollup_daily_metrics(db, date(2026, 10, 17), tz=pytz.timezone("America/New_York"), now=NOW)
        assert bucket.total_stories == 3
        assert bucket.totals_by_domain == {"health": 2, "personal": 1}


class TestWeeklyRollup:

    def test_week_start_is_sunday(self):
        assert week_start_for(date(2026, 10, 21)) == date(2026, 10, 18)
        assert week_start_for(date(2026, 10, 18)) == date(2026, 10, 18)
        assert week_start_for(date(2026, 10, 17)) == date(2026, 10, 11)

    def test_week_bucket(self, db):
        _seed(db)
        bucket = rollup_weekly_metrics(db, date(2026, 10, 14), tz=pytz.utc, now=NOW)

        assert bucket.period == MetricPeriod.weekly
        assert bucket.timestamp == datetime(2026, 10, 11)
        assert bucket.total_stories == 2

    def test_daily_and_weekly_coexist(self, db):
        _seed(db)
        rollup_daily_metrics(db, date(2026, 10, 18), tz=pytz.utc, now=NOW)
        rollup_weekly_metrics(db, date(2026, 10, 18), tz=pytz.utc, now=NOW)
        assert db.query(MetricBucket).count() == 2


def test_previous_local_day():
    now = datetime(2026, 10, 19, 0, 5, tzinfo=pytz.utc)
    assert previous_local_day(now, tz=pytz.utc) == date(2026, 10, 18)


class TestOpenPeriods:
    """Days and weeks that have not ended are never bucketed."""

    def test_today_rejected(self, db):
        _seed(db)
        with pytest.raises(RollupPeriodOpen):
            rollup_daily_metrics(db, date(2026, 10, 26), tz=pytz.utc, now=NOW)
        assert db.query(MetricBucket).count() == 0

    def test_future_day_rejected(self, db):
        with pytest.raises(RollupPeriodOpen):
            rollup_daily_metrics(db, date(2026, 10, 29), tz=pytz.utc, now=NOW)
        assert db.query(MetricBucket).count() == 0

    def test_yesterday_accepted(self, db):
        bucket = rollup_daily_metrics(db, date(2026, 10, 25), tz=pytz.utc, now=NOW)
        assert bucket.timestamp == datetime(2026, 10, 25)

    def test_current_week_rejected(self, db):
        with pytest.raises(RollupPeriodOpen):
            rollup_weekly_metrics(db, date(2026, 10, 25), tz=pytz.utc, now=NOW)
        assert db.query(MetricBucket).count() == 0

    def test_week_ending_yesterday_accepted(self, db):
        saturday_night = datetime(2026, 10, 25, 0, 10, tzinfo=pytz.utc)
        bucket = rollup_weekly_metrics(db, date(2026, 10, 18), tz=pytz.utc, now=saturday_night)
        assert bucket.timestamp == datetime(2026, 10, 18)

    def test_rejected_day_keeps_later_stories(self, db):
        _seed(db)
        evening = datetime(2026, 10, 17, 23, 0, tzinfo=pytz.utc)
        with pytest.raises(RollupPeriodOpen):
            rollup_daily_metrics(db, date(2026, 10, 17), tz=pytz.utc, now=evening)

        db.add(Story(author_uid="writer", text="late", emotion_score=5,
                     domain=StoryDomain.legal, created_at=datetime(2026, 10, 17, 23, 30)))
        db.commit()

        bucket = rollup_daily_metrics(db, date(2026, 10, 17), tz=pytz.utc, now=NOW)
        assert bucket.total_stories == 3
