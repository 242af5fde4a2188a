# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storytime.auth import get_db
from storytime.models.tenant import Tenant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.get("/{tenant_id}/branding")
def tenant_branding(tenant_id: str, db: Session = Depends(get_db)):
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant or not tenant.branding:
        logger.info(f"No branding found for tenant: {tenant_id}")
        return {"tenant_id": tenant_id, "branding": None}

    return {"tenant_id": tenant_id, "branding": tenant.branding}
