"""Pydantic schemas for BuddyRequests."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel


class BuddyRequestCreate(BaseModel):
    receiver_id: int


class BuddyRequestRespond(BaseModel):
    decision: Literal["accept", "reject"]


class BuddyRequestOut(BaseModel):
    request_id: int
    sender_id: int
    receiver_id: int
    status: str
    created_at: datetime
    responded_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
