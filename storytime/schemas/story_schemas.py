# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel
from typing import List
from storytime.models.story import StoryDomain


class StoryCreateRequest(BaseModel):
    text: str
    domain: StoryDomain = StoryDomain.personal
    anchor_tags: List[str] = []
    prompt_tags: List[str] = []  # tags of the memory cue shown while writing
    is_public: bool = False


class SealRequest(BaseModel):
    hash: str
    proof: str
