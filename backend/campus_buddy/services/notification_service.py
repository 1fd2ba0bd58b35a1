"""Notification lifecycle: owner-only mark-read and delete.

``is_read`` is monotonic: marking an already-read notification succeeds
without changing anything. Deleting twice yields NotFound the second time,
which callers treat as "already gone".
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from campus_buddy.models.notification import Notification
from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import Failure, Outcome, parse_id, store_guard

logger = logging.getLogger(__name__)


def _owned(db: Session, notification_id: Any, identity: Identity) -> Outcome[Notification]:
    """Load a notification and check that ``identity`` owns it."""
    pk = parse_id(notification_id)
    notification = db.get(Notification, pk) if pk is not None else None
    if notification is None:
        return Outcome.fail(Failure.not_found)
    if notification.user_id != identity.id:
        logger.info("User %s denied access to notification %s", identity.id, pk)
        return Outcome.fail(Failure.unauthorized)
    return Outcome.success(notification)


@store_guard
def create_notification(db: Session, user_id: int, message: str) -> Notification:
    """Trigger interface for whatever raises notifications."""
    notification = Notification(user_id=user_id, message=message, is_read=False)
    db.add(notification)
    db.commit()
    db.refresh(notification)
    logger.info("Notification %s created for user %s", notification.notification_id, user_id)
    return notification


@store_guard
def list_for_user(db: Session, user_id: int, limit: int = 50) -> list[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.notification_id.desc())
        .limit(limit)
        .all()
    )


@store_guard
def mark_read(db: Session, notification_id: Any, identity: Identity) -> Outcome[Notification]:
    outcome = _owned(db, notification_id, identity)
    if not outcome.ok:
        return outcome
    notification = outcome.value
    if not notification.is_read:
        notification.is_read = True
        db.commit()
        db.refresh(notification)
        logger.info("Notification %s marked read", notification.notification_id)
    return Outcome.success(notification)


@store_guard
def delete(db: Session, notification_id: Any, identity: Identity) -> Outcome[None]:
    outcome = _owned(db, notification_id, identity)
    if not outcome.ok:
        return Outcome.fail(outcome.failure)
    pk = outcome.value.notification_id
    removed = (
        db.query(Notification)
        .filter(
            Notification.notification_id == pk,
            Notification.user_id == identity.id,
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    if not removed:
        # Someone else deleted it between the read and the delete.
        return Outcome.fail(Failure.not_found)
    logger.info("Notification %s deleted by user %s", pk, identity.id)
    return Outcome.success()
