"""Pydantic schemas for Events and their participants."""
from __future__ import annotations
import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    date: dt.date
    time: Optional[dt.time] = None
    location: Optional[str] = None


class ParticipantOut(BaseModel):
    user_id: int
    joined_at: dt.datetime

    model_config = {"from_attributes": True}


class EventOut(BaseModel):
    event_id: int
    title: str
    description: Optional[str] = None
    date: dt.date
    time: Optional[dt.time] = None
    location: Optional[str] = None
    creator_id: Optional[int] = None
    participants: list[ParticipantOut] = []

    model_config = {"from_attributes": True}
