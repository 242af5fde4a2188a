# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON
from storytime.models.database import Base

class Prompt(Base):
    __tablename__ = "prompts"

    id = Column(Integer, primary_key=True, index=True)
    prompt_text = Column(Text, nullable=False)
    category = Column(String, nullable=False, index=True)  # matches StoryDomain values
    tags = Column(JSON, default=list, nullable=False)
    language = Column(String, default="en")

    # NULL means a global prompt, otherwise a tenant override
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=True, index=True)
