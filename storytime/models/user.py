# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from storytime.models.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # ✅ Anonymous login tracking (device id issued by the client)
    uid = Column(String, nullable=False, unique=True, index=True)

    # ✅ Consent + access flags, both off for a fresh profile
    research_consent = Column(Boolean, default=False, nullable=False)
    free_elder_access = Column(Boolean, default=False, nullable=False)
    birth_year = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    # ✅ Relationships
    stories = relationship("Story", back_populates="author", cascade="all, delete-orphan")
