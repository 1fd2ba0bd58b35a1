"""View-models handed to the page layer in place of rendered templates."""
from pydantic import BaseModel

from campus_buddy.schemas.event import EventOut
from campus_buddy.schemas.notification import NotificationOut
from campus_buddy.schemas.session import Identity


class AuthPageOut(BaseModel):
    page: str
    messages: dict[str, list[str]] = {}


class DashboardOut(BaseModel):
    user: Identity
    notifications: list[NotificationOut] = []
    events: list[EventOut] = []


class EventPageOut(BaseModel):
    event: EventOut


class EventsPageOut(BaseModel):
    events: list[EventOut] = []
