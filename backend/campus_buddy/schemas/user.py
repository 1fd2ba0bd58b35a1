"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UserUpdate(BaseModel):
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    interests: Optional[str] = None
    hobbies: Optional[str] = None
    academic_info: Optional[str] = None
    available_time: Optional[str] = None


class UserOut(BaseModel):
    user_id: int
    email: str
    display_name: str
    interests: Optional[str] = None
    hobbies: Optional[str] = None
    academic_info: Optional[str] = None
    available_time: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
