# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storytime.auth import get_db
from storytime.models.story import Story
from storytime.services.snapshots import story_snapshot_from_row

router = APIRouter(prefix="/public", tags=["Public"])

NOT_FOUND = "Story not found or not public."


@router.get("/stories/{story_id}")
def view_public_story(story_id: str, db: Session = Depends(get_db)):
    """Anonymous viewer. Private and missing stories look the same."""
    story = db.query(Story).filter(Story.id == story_id).first()
    if not story or not story.is_public:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    return story_snapshot_from_row(story).to_dict()
