"""Buddy request API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_buddy.database import get_db
from campus_buddy.dependencies import require_identity
from campus_buddy.routers.common import unwrap
from campus_buddy.schemas.buddy_request import BuddyRequestCreate, BuddyRequestOut, BuddyRequestRespond
from campus_buddy.schemas.session import Identity
from campus_buddy.services import buddy_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=BuddyRequestOut, status_code=status.HTTP_201_CREATED)
def send_buddy_request(
    payload: BuddyRequestCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_identity),
):
    """Send a buddy request from the caller to ``receiver_id``."""
    return unwrap(buddy_service.send(db, identity, payload.receiver_id))


@router.get("/sent", response_model=list[BuddyRequestOut])
def sent_requests(db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Requests the caller has sent, newest first."""
    return buddy_service.list_sent(db, identity.id)


@router.get("/received", response_model=list[BuddyRequestOut])
def received_requests(db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Requests addressed to the caller, newest first."""
    return buddy_service.list_received(db, identity.id)


@router.post("/{request_id}/respond", response_model=BuddyRequestOut)
def respond_to_request(
    request_id: str,
    payload: BuddyRequestRespond,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_identity),
):
    """Accept or reject a pending request addressed to the caller."""
    return unwrap(buddy_service.respond(db, request_id, identity, payload.decision))
