"""Event API routes: creation, listing and joining."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_buddy.database import get_db
from campus_buddy.dependencies import get_clock, require_identity
from campus_buddy.routers.common import unwrap
from campus_buddy.schemas.event import EventCreate, EventOut, ParticipantOut
from campus_buddy.schemas.session import Identity
from campus_buddy.services import event_service, participation_service
from campus_buddy.services.session_store import Clock

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Create a new event owned by the caller."""
    return event_service.create_event(
        db=db,
        creator=identity,
        title=payload.title,
        event_date=payload.date,
        event_time=payload.time,
        description=payload.description,
        location=payload.location,
    )


@router.get("/", response_model=list[EventOut])
def list_events(db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """List all events in date order."""
    return event_service.list_events(db)


@router.get("/upcoming", response_model=list[EventOut])
def upcoming_events(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    identity: Identity = Depends(require_identity),
):
    """Events from today (campus time) onwards."""
    return event_service.upcoming_events(db, clock())


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Fetch a single event with its participants."""
    event = event_service.get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.post("/{event_id}/join", response_model=ParticipantOut, status_code=status.HTTP_201_CREATED)
def join_event(event_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Join an event as the caller; a second join is a 409."""
    return unwrap(participation_service.join(db, event_id, identity))


@router.get("/{event_id}/participants", response_model=list[ParticipantOut])
def list_participants(event_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Participants of an event, in join order."""
    if not event_service.get_event(db, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return participation_service.list_participants(db, event_id)
