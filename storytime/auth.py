# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session
from storytime.models.database import SessionLocal
from storytime.models.user import User
from storytime.utils.auth_utils import require_token

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(user_data: dict = Depends(require_token), db: Session = Depends(get_db)) -> User:
    user = db.query(User).filter(User.uid == user_data.get("sub")).first()
    if not user:
        raise HTTPException(status_code=404, detail="❌ User not found")

    return user
