# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

"""
Immutable views over stored rows.

Routers convert ORM objects into these snapshots before calling the
aggregator or the grouper, so the pure functions never see a session,
a lazy relationship or a naive timestamp.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Optional, Tuple

from storytime.utils.time_utils import to_utc, from_epoch_parts


@dataclass(frozen=True)
class StorySnapshot:
    id: str
    author_uid: str
    text: str
    anchor_tags: Tuple[str, ...] = ()
    emotion_score: int = 3
    domain: Optional[str] = None
    is_public: bool = False
    created_at: Optional[datetime] = None
    seal_hash: Optional[str] = None
    seal_proof: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "anchor_tags": list(self.anchor_tags),
            "emotion_score": self.emotion_score,
            "domain": self.domain,
            "is_public": self.is_public,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "sealed": bool(self.seal_hash),
        }


@dataclass(frozen=True)
class MetricSnapshot:
    totals_by_domain: Mapping[str, int] = field(default_factory=dict)
    total_stories: int = 0
    total_emotion_score: int = 0
    timestamp: Optional[datetime] = None


def story_snapshot_from_row(story) -> StorySnapshot:
    domain = story.domain.value if hasattr(story.domain, "value") else story.domain
    return StorySnapshot(
        id=story.id,
        author_uid=story.author_uid,
        text=story.text or "",
        anchor_tags=tuple(story.anchor_tags or ()),
        emotion_score=story.emotion_score,
        domain=domain,
        is_public=bool(story.is_public),
        created_at=to_utc(story.created_at),
        seal_hash=story.seal_hash,
        seal_proof=story.seal_proof,
    )


def metric_snapshot_from_row(bucket) -> MetricSnapshot:
    return MetricSnapshot(
        totals_by_domain=dict(bucket.totals_by_domain or {}),
        total_stories=bucket.total_stories or 0,
        total_emotion_score=bucket.total_emotion_score or 0,
        timestamp=to_utc(bucket.timestamp),
    )


def metric_snapshot_from_document(doc: Mapping) -> MetricSnapshot:
    """
    Accepts the exported document shape:
    {totalsByDomain, totalStories, totalEmotionScore, timestamp: {seconds, nanoseconds}}
    """
    raw_ts = doc.get("timestamp")
    if isinstance(raw_ts, Mapping):
        timestamp = from_epoch_parts(raw_ts.get("seconds"), raw_ts.get("nanoseconds"))
    elif isinstance(raw_ts, datetime):
        timestamp = to_utc(raw_ts)
    else:
        timestamp = None

    return MetricSnapshot(
        totals_by_domain=dict(doc.get("totalsByDomain") or {}),
        total_stories=doc.get("totalStories") or 0,
        total_emotion_score=doc.get("totalEmotionScore") or 0,
        timestamp=timestamp,
    )
