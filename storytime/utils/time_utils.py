# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Timestamp normalization.

Everything that reaches the aggregator or the grouper is a timezone-aware
UTC datetime (or None). Naive values coming out of the database are UTC.
"""

import os
from datetime import datetime, timezone
from typing import Optional

import pytz


def get_app_timezone():
    """Calendar timezone used for "today" and "this week" boundaries."""
    return pytz.timezone(os.getenv("APP_TIMEZONE", "UTC"))


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    """For comparisons against naive UTC DateTime columns."""
    return to_utc(value).replace(tzinfo=None)


def from_epoch_parts(seconds, nanoseconds=0) -> Optional[datetime]:
    """Build a UTC datetime from a {seconds, nanoseconds} document timestamp."""
    if seconds is None:
        return None
    return datetime.fromtimestamp(int(seconds) + int(nanoseconds or 0) / 1e9, tz=timezone.utc)


def epoch_seconds(value: Optional[datetime]) -> float:
    # Missing timestamps sort first
    if value is None:
        return 0.0
    return to_utc(value).timestamp()
