# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
import random
from typing import Optional

from sqlalchemy.orm import Session

from storytime.models.prompt import Prompt

logger = logging.getLogger(__name__)


def pick_random_prompt(db: Session, domain: str, tenant_id: Optional[str] = None, rng=None) -> Optional[Prompt]:
    """
    Random memory cue for a domain.

    A tenant's own prompts replace the global set whenever the tenant has
    at least one prompt for that domain.
    """
    rng = rng or random
    candidates = []

    if tenant_id:
        candidates = db.query(Prompt).filter(
            Prompt.tenant_id == tenant_id,
            Prompt.category == domain
        ).all()
        if not candidates:
            logger.info(f"🏷️ No {domain} prompts for tenant {tenant_id}, using global prompts.")

    if not candidates:
        candidates = db.query(Prompt).filter(
            Prompt.tenant_id.is_(None),
            Prompt.category == domain
        ).all()

    if not candidates:
        return None
    return rng.choice(candidates)
