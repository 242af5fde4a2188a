# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storytime.auth import get_db, get_current_user
from storytime.models.user import User
from storytime.schemas.user_schemas import BirthYearRequest, ResearchConsentRequest
from storytime.services.profile_service import apply_birth_year, is_plausible_birth_year, profile_to_dict

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("")
def get_profile(user: User = Depends(get_current_user)):
    return profile_to_dict(user)


@router.post("/birth-year")
def save_birth_year(payload: BirthYearRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not is_plausible_birth_year(payload.birth_year):
        raise HTTPException(status_code=400, detail="Invalid birth year.")

    user = apply_birth_year(db, user, payload.birth_year)
    return {
        "message": "✅ Birth year saved",
        "profile": profile_to_dict(user),
    }


@router.post("/research-consent")
def update_research_consent(payload: ResearchConsentRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user.research_consent = payload.research
    db.commit()
    db.refresh(user)
    logger.info(f"🔬 Research consent for {user.uid} set to {payload.research}")

    return {
        "message": "✅ Research consent updated",
        "profile": profile_to_dict(user),
    }
