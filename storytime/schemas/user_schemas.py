# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel
from typing import Optional


class LoginRequest(BaseModel):
    device_id: Optional[str] = None


class BirthYearRequest(BaseModel):
    birth_year: int


class ResearchConsentRequest(BaseModel):
    research: bool
