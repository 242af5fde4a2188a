# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from datetime import datetime

from sqlalchemy.orm import Session

from storytime.models.user import User

logger = logging.getLogger(__name__)

ELDER_ACCESS_CUTOFF_YEAR = 1935
EARLIEST_BIRTH_YEAR = 1850


def grants_elder_access(birth_year: int) -> bool:
    return birth_year < ELDER_ACCESS_CUTOFF_YEAR


def is_plausible_birth_year(birth_year: int) -> bool:
    return EARLIEST_BIRTH_YEAR <= birth_year <= datetime.utcnow().year


def get_or_create_profile(db: Session, uid: str):
    """Returns (user, created). New profiles start with every flag off."""
    user = db.query(User).filter(User.uid == uid).first()
    if user:
        return user, False

    user = User(uid=uid, research_consent=False, free_elder_access=False)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"🆕 Created profile for {uid}")
    return user, True


def apply_birth_year(db: Session, user: User, birth_year: int) -> User:
    user.birth_year = birth_year
    user.free_elder_access = grants_elder_access(birth_year)
    db.commit()
    db.refresh(user)
    logger.info(f"🎂 Birth year saved for {user.uid}, free_elder_access={user.free_elder_access}")
    return user


def profile_to_dict(user: User) -> dict:
    return {
        "uid": user.uid,
        "consent_flags": {"research": bool(user.research_consent)},
        "flags": {"free_elder_access": bool(user.free_elder_access)},
        "birth_year": user.birth_year,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }
