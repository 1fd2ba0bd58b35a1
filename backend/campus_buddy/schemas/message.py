"""Pydantic schemas for direct Messages."""
from datetime import datetime
from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    receiver_id: int
    content: str = Field(min_length=1, max_length=5000)


class MessageOut(BaseModel):
    message_id: int
    sender_id: int
    receiver_id: int
    content: str
    sent_at: datetime

    model_config = {"from_attributes": True}
