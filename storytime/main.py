# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
import os
from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from storytime.models import database
from storytime.models import *  # registers all models

from storytime.routers import anonymous_router, profile_router, story_router
from storytime.routers import public_router, prompt_router, tenant_router
from storytime.routers import admin_router, healthz_router

from storytime.utils.rate_limit_utils import limiter
from storytime.utils.schedulers.metrics_jobs import run_daily_rollup, run_weekly_rollup
from storytime.utils.time_utils import get_app_timezone

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create DB tables in one go
database.Base.metadata.create_all(bind=database.engine)

# Scheduler setup
scheduler = BackgroundScheduler(job_defaults={"misfire_grace_time": 60})
SCHEDULER_ENABLED = os.getenv("ENABLE_SCHEDULER", "true").lower() == "true"

@asynccontextmanager
async def lifespan(app: FastAPI):
    if not SCHEDULER_ENABLED:
        logger.info("⏸️ Scheduler disabled, metric roll-ups will not run.")
        yield
        return

    tz = get_app_timezone()

    # 🕛 Yesterday's daily bucket, just after midnight
    scheduler.add_job(run_daily_rollup, "cron", hour=0, minute=5, timezone=tz)

    # 🗓️ Last week's bucket, early Sunday
    scheduler.add_job(run_weekly_rollup, "cron", day_of_week="sun", hour=0, minute=10, timezone=tz)

    scheduler.start()
    yield
    scheduler.shutdown()

# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Storytime API",
    description="Anonymous memory journaling backend",
    version="1.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(anonymous_router.router)
app.include_router(profile_router.router)
app.include_router(story_router.router)
app.include_router(public_router.router)
app.include_router(prompt_router.router)
app.include_router(tenant_router.router)
app.include_router(admin_router.router)
app.include_router(healthz_router.router)


# ---------------------- ADDING EXCEPTION HANDLER ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request, exc):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )

@app.get("/")
def read_root():
    return {"message": "Welcome to Storytime - memory journaling backend Live"}
