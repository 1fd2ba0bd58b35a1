"""Event service: creation and read paths for campus events."""
import logging
from datetime import date, datetime, time
from typing import Any, Optional

import pytz
from sqlalchemy.orm import Session

from campus_buddy.config import settings
from campus_buddy.models.event import Event
from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import parse_id, store_guard

logger = logging.getLogger(__name__)


def campus_today(now_utc: datetime, tz_name: Optional[str] = None) -> date:
    """Calendar date on campus at ``now_utc``."""
    tz = pytz.timezone(tz_name or settings.CAMPUS_TIMEZONE)
    if now_utc.tzinfo is None:
        now_utc = pytz.utc.localize(now_utc)
    return now_utc.astimezone(tz).date()


@store_guard
def create_event(
    db: Session,
    creator: Identity,
    title: str,
    event_date: date,
    event_time: Optional[time] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
) -> Event:
    event = Event(
        title=title,
        description=description,
        date=event_date,
        time=event_time,
        location=location,
        creator_id=creator.id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by user %s", title, event.event_id, creator.id)
    return event


@store_guard
def get_event(db: Session, event_id: Any) -> Optional[Event]:
    pk = parse_id(event_id)
    if pk is None:
        return None
    return db.get(Event, pk)


@store_guard
def list_events(db: Session, limit: int = 200) -> list[Event]:
    return db.query(Event).order_by(Event.date, Event.time, Event.event_id).limit(limit).all()


@store_guard
def upcoming_events(db: Session, now_utc: datetime, limit: int = 10) -> list[Event]:
    """Events on or after today's campus date, soonest first."""
    today = campus_today(now_utc)
    return (
        db.query(Event)
        .filter(Event.date >= today)
        .order_by(Event.date, Event.time, Event.event_id)
        .limit(limit)
        .all()
    )
