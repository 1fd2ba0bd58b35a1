"""Event participation: the join transition.

The existence check before inserting only saves a round trip. Two joins
racing past it are stopped by the (event_id, user_id) primary key, and that
violation is reported exactly like the pre-check: AlreadyJoined.
"""
import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_buddy.models.event import Event
from campus_buddy.models.participant import EventParticipant
from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import Failure, Outcome, parse_id, store_guard

logger = logging.getLogger(__name__)


def _already_joined(db: Session, event_id: int, user_id: int) -> bool:
    return (
        db.query(EventParticipant)
        .filter(EventParticipant.event_id == event_id, EventParticipant.user_id == user_id)
        .first()
        is not None
    )


@store_guard
def join(db: Session, event_id: Any, identity: Identity) -> Outcome[EventParticipant]:
    pk = parse_id(event_id)
    event = db.get(Event, pk) if pk is not None else None
    if event is None:
        return Outcome.fail(Failure.event_not_found)

    if _already_joined(db, pk, identity.id):
        logger.info("User %s already joined event %s", identity.id, pk)
        return Outcome.fail(Failure.already_joined)

    participant = EventParticipant(event_id=pk, user_id=identity.id)
    db.add(participant)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent join of event %s by user %s rejected by store", pk, identity.id)
        return Outcome.fail(Failure.already_joined)
    db.refresh(participant)
    logger.info("User %s joined event %s", identity.id, pk)
    return Outcome.success(participant)


@store_guard
def list_participants(db: Session, event_id: Any) -> list[EventParticipant]:
    pk = parse_id(event_id)
    if pk is None:
        return []
    return (
        db.query(EventParticipant)
        .filter(EventParticipant.event_id == pk)
        .order_by(EventParticipant.joined_at, EventParticipant.user_id)
        .all()
    )
