"""Notification API routes: owner-only read state and deletion."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_buddy.database import get_db
from campus_buddy.dependencies import require_identity
from campus_buddy.routers.common import unwrap
from campus_buddy.schemas.notification import NotificationOut
from campus_buddy.schemas.session import Identity
from campus_buddy.services import notification_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[NotificationOut])
def list_notifications(db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """The caller's notifications, newest first."""
    return notification_service.list_for_user(db, identity.id)


@router.post("/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Mark one of the caller's notifications as read (idempotent)."""
    return unwrap(notification_service.mark_read(db, notification_id, identity))


@router.delete("/{notification_id}")
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_identity),
):
    """Delete one of the caller's notifications."""
    unwrap(notification_service.delete(db, notification_id, identity))
    return {"status": "deleted"}
