# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, String, JSON
from storytime.models.database import Base

class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String, primary_key=True)  # slug used in ?tenant=
    name = Column(String, default="")

    # logoUrl / primaryColor / secondaryColor
    branding = Column(JSON, nullable=True)
