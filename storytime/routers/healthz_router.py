# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from storytime.models.database import SessionLocal

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Infra"])


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/healthz")
def deep_health_check():
    db: Session = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "details": {"db_connection": True}}
    except SQLAlchemyError as e:
        logger.error(f"❌ Health check DB failure: {e}")
        return {"status": "error", "error": str(e), "details": {"db_connection": False}}
    finally:
        db.close()
