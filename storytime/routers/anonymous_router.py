# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storytime.auth import get_db
from storytime.schemas.user_schemas import LoginRequest
from storytime.services.profile_service import get_or_create_profile, profile_to_dict
from storytime.utils.jwt_utils import create_access_token

router = APIRouter(prefix="/auth", tags=["Anonymous Auth"])


@router.post("/anonymous-login")
def anonymous_login(payload: LoginRequest, db: Session = Depends(get_db)):
    device_id = (payload.device_id or "").strip() or str(uuid.uuid4())

    user, created = get_or_create_profile(db, device_id)
    token = create_access_token({"sub": user.uid})

    return {
        "message": "🆕 New anonymous user created" if created else "🔁 Returning user",
        "token": token,
        "user": profile_to_dict(user),
    }
