# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from storytime.auth import get_db
from storytime.models.story import StoryDomain
from storytime.services.prompt_service import pick_random_prompt

router = APIRouter(prefix="/prompts", tags=["Prompts"])


@router.get("/random")
def random_prompt(
    domain: StoryDomain = Query(StoryDomain.personal),
    tenant: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    prompt = pick_random_prompt(db, domain.value, tenant_id=tenant)
    if prompt is None:
        return {"domain": domain.value, "prompt": None}

    return {
        "domain": domain.value,
        "prompt": {
            "prompt_text": prompt.prompt_text,
            "category": prompt.category,
            "tags": list(prompt.tags or []),
            "language": prompt.language,
            "tenant_id": prompt.tenant_id,
        }
    }
