# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import enum
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from storytime.auth import get_db, get_current_user
from storytime.models.story import Story
from storytime.models.user import User
from storytime.schemas.story_schemas import StoryCreateRequest, SealRequest
from storytime.services.sentiment_scorer import get_emotion_score
from storytime.services.snapshots import story_snapshot_from_row
from storytime.services.story_grouper import GroupingMode, ReplayCursor, group_stories
from storytime.utils.rate_limit_utils import limiter, STORY_WRITE_RATE
from storytime.utils.tag_utils import merge_anchor_tags

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stories", tags=["Stories"])


class ReplayStep(str, enum.Enum):
    next = "next"
    previous = "previous"


def _get_own_story(db: Session, story_id: str, user: User) -> Story:
    story = db.query(Story).filter(Story.id == story_id).first()
    if not story:
        raise HTTPException(status_code=404, detail="Story not found.")
    if story.author_uid != user.uid:
        raise HTTPException(status_code=403, detail="You can only change your own stories.")
    return story


@router.post("")
@limiter.limit(STORY_WRITE_RATE)
async def create_story(
    request: Request,
    payload: StoryCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="Journal entry text is required.")

    story = Story(
        author_uid=user.uid,
        text=payload.text,
        anchor_tags=merge_anchor_tags(payload.anchor_tags, payload.prompt_tags),
        emotion_score=get_emotion_score(payload.text),
        domain=payload.domain,
        is_public=payload.is_public,
    )
    db.add(story)
    db.commit()
    db.refresh(story)

    logger.info(f"📝 Story {story.id} saved for {user.uid} (score {story.emotion_score})")
    return {
        "message": "✅ Journal entry saved",
        "story": story_snapshot_from_row(story).to_dict(),
    }


@router.get("")
def list_stories(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    stories = (
        db.query(Story)
        .filter(Story.author_uid == user.uid)
        .order_by(Story.created_at.desc())
        .all()
    )
    return {
        "count": len(stories),
        "stories": [story_snapshot_from_row(s).to_dict() for s in stories],
    }


@router.get("/replay")
def replay_stories(
    group_by: GroupingMode = Query(GroupingMode.none),
    index: int = Query(0, ge=0),
    step: Optional[ReplayStep] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    One position of a memory replay. The client keeps the index and sends
    it back with step=next / step=previous.
    """
    rows = db.query(Story).filter(Story.author_uid == user.uid).all()
    ordered = group_stories([story_snapshot_from_row(r) for r in rows], group_by)

    cursor = ReplayCursor(len(ordered), index)
    if step is ReplayStep.next:
        cursor.next()
    elif step is ReplayStep.previous:
        cursor.previous()

    return {
        "group_by": group_by.value,
        "total": len(ordered),
        "index": cursor.index,
        "story": ordered[cursor.index].to_dict() if ordered else None,
    }


@router.post("/{story_id}/visibility")
def toggle_story_visibility(story_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    story = _get_own_story(db, story_id, user)
    story.is_public = not story.is_public
    db.commit()

    logger.info(f"👁️ Story {story_id} is now {'public' if story.is_public else 'private'}")
    return {"id": story.id, "is_public": story.is_public}


@router.post("/{story_id}/seal")
def seal_story(story_id: str, payload: SealRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    story = _get_own_story(db, story_id, user)
    if story.is_sealed:
        raise HTTPException(status_code=409, detail="Story is already sealed.")
    if not payload.hash.strip() or not payload.proof.strip():
        raise HTTPException(status_code=400, detail="Seal hash and proof are required.")

    story.seal_hash = payload.hash
    story.seal_proof = payload.proof
    db.commit()

    logger.info(f"🔏 Story {story_id} sealed")
    return {"id": story.id, "sealed": True}
