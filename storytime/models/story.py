# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import enum
import uuid
from sqlalchemy import Column, Integer, String, DateTime, Boolean, Enum, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from storytime.models.database import Base
from storytime.utils.encryption import EncryptedText


class StoryDomain(str, enum.Enum):
    personal = "personal"
    health = "health"
    education = "education"
    legal = "legal"
    marketing = "marketing"


def _new_story_id() -> str:
    return str(uuid.uuid4())


class Story(Base):
    __tablename__ = "stories"

    id = Column(String, primary_key=True, default=_new_story_id)
    author_uid = Column(String, ForeignKey("users.uid"), nullable=False, index=True)

    text = Column(EncryptedText, nullable=False)  # 🔐 Fernet token at rest
    anchor_tags = Column(JSON, default=list, nullable=False)
    emotion_score = Column(Integer, nullable=False, default=3)  # 1..5
    domain = Column(Enum(StoryDomain), default=StoryDomain.personal, nullable=False)

    # Only this flag decides what the anonymous viewer can read
    is_public = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Integrity seal, appended once by the author
    seal_hash = Column(String, nullable=True)
    seal_proof = Column(String, nullable=True)

    author = relationship("User", back_populates="stories")

    @property
    def is_sealed(self) -> bool:
        return bool(self.seal_hash)
