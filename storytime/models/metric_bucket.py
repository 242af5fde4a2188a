# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import enum
from sqlalchemy import Column, Integer, DateTime, Enum, JSON, UniqueConstraint
from datetime import datetime
from storytime.models.database import Base


class MetricPeriod(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"


class MetricBucket(Base):
    """Append-only usage counters for one day or one week."""

    __tablename__ = "metric_buckets"

    id = Column(Integer, primary_key=True, index=True)
    period = Column(Enum(MetricPeriod), nullable=False, index=True)

    totals_by_domain = Column(JSON, default=dict, nullable=False)  # e.g. {"health": 3}
    total_stories = Column(Integer, default=0, nullable=False)
    total_emotion_score = Column(Integer, default=0, nullable=False)

    timestamp = Column(DateTime, nullable=False, index=True)  # bucket start, UTC
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (UniqueConstraint("period", "timestamp", name="uq_metric_period_timestamp"),)
