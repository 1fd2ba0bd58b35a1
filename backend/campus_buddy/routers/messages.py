"""Direct message API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campus_buddy.database import get_db
from campus_buddy.dependencies import require_identity
from campus_buddy.routers.common import unwrap
from campus_buddy.schemas.message import MessageCreate, MessageOut
from campus_buddy.schemas.session import Identity
from campus_buddy.services import message_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[MessageOut])
def list_messages(db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Messages the caller sent or received, newest first."""
    return message_service.list_messages(db, identity.id)


@router.post("/", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(payload: MessageCreate, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Send a message from the caller."""
    return unwrap(message_service.send_message(db, identity, payload.receiver_id, payload.content))
