"""Authenticated identity carried by a session."""
from pydantic import BaseModel


class Identity(BaseModel):
    """Snapshot of the logged-in user, taken at login time."""

    id: int
    email: str
    display_name: str

    model_config = {"frozen": True}
