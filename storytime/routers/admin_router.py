# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from storytime.auth import get_db
from storytime.models.metric_bucket import MetricBucket, MetricPeriod
from storytime.services.metrics_aggregator import aggregate_metrics
from storytime.services.metrics_rollup import RollupPeriodOpen, rollup_daily_metrics, previous_local_day
from storytime.services.snapshots import metric_snapshot_from_row
from storytime.utils.auth_utils import require_admin_key

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin_key)])


@router.get("/metrics")
def admin_metrics(
    period: MetricPeriod = Query(MetricPeriod.daily),
    db: Session = Depends(get_db)
):
    buckets = db.query(MetricBucket).filter(MetricBucket.period == period).all()
    summary = aggregate_metrics(metric_snapshot_from_row(b) for b in buckets)

    return {"period": period.value, **summary.to_dict()}


@router.post("/metrics/rollup")
def trigger_daily_rollup(day: Optional[date] = Query(None), db: Session = Depends(get_db)):
    """Writes the daily bucket for a finished day (default: yesterday). Existing buckets are kept."""
    day = day or previous_local_day()
    try:
        bucket = rollup_daily_metrics(db, day)
    except RollupPeriodOpen as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "day": day.isoformat(),
        "totals_by_domain": bucket.totals_by_domain,
        "total_stories": bucket.total_stories,
        "total_emotion_score": bucket.total_emotion_score,
    }
