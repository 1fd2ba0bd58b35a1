"""Buddy request lifecycle.

send:    pending request from the identity to a receiver.
respond: receiver-only, one-shot pending -> accepted | rejected.

Duplicate pending pairs are blocked by a partial unique index; the resolve
step is a conditional UPDATE on ``status = pending`` so only one responder
can ever win.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Literal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_buddy.models.buddy_request import BuddyRequest, BuddyRequestStatus
from campus_buddy.models.user import User
from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import Failure, Outcome, parse_id, store_guard

logger = logging.getLogger(__name__)

Decision = Literal["accept", "reject"]

_DECISIONS = {
    "accept": BuddyRequestStatus.accepted,
    "reject": BuddyRequestStatus.rejected,
}


def _pending_exists(db: Session, sender_id: int, receiver_id: int) -> bool:
    return (
        db.query(BuddyRequest)
        .filter(
            BuddyRequest.sender_id == sender_id,
            BuddyRequest.receiver_id == receiver_id,
            BuddyRequest.status == BuddyRequestStatus.pending,
        )
        .first()
        is not None
    )


@store_guard
def send(db: Session, sender: Identity, receiver_id: Any) -> Outcome[BuddyRequest]:
    pk = parse_id(receiver_id)
    if pk is not None and pk == sender.id:
        logger.info("User %s tried to send a buddy request to themselves", sender.id)
        return Outcome.fail(Failure.self_request)
    if pk is None or db.get(User, pk) is None:
        return Outcome.fail(Failure.not_found)

    if _pending_exists(db, sender.id, pk):
        logger.info("Buddy request %s -> %s already pending", sender.id, pk)
        return Outcome.fail(Failure.duplicate_pending)

    request = BuddyRequest(sender_id=sender.id, receiver_id=pk, status=BuddyRequestStatus.pending)
    db.add(request)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent buddy request %s -> %s rejected by store", sender.id, pk)
        return Outcome.fail(Failure.duplicate_pending)
    db.refresh(request)
    logger.info("Buddy request %s sent %s -> %s", request.request_id, sender.id, pk)
    return Outcome.success(request)


@store_guard
def respond(db: Session, request_id: Any, responder: Identity, decision: Decision) -> Outcome[BuddyRequest]:
    if decision not in _DECISIONS:
        raise ValueError(f"Unknown decision: {decision!r}")

    pk = parse_id(request_id)
    request = db.get(BuddyRequest, pk) if pk is not None else None
    if request is None:
        return Outcome.fail(Failure.not_found)
    if request.receiver_id != responder.id:
        logger.info("User %s denied response to buddy request %s", responder.id, pk)
        return Outcome.fail(Failure.unauthorized)
    if request.status != BuddyRequestStatus.pending:
        return Outcome.fail(Failure.already_resolved)

    updated = (
        db.query(BuddyRequest)
        .filter(BuddyRequest.request_id == pk, BuddyRequest.status == BuddyRequestStatus.pending)
        .update(
            {"status": _DECISIONS[decision], "responded_at": datetime.now(timezone.utc)},
            synchronize_session=False,
        )
    )
    db.commit()
    if not updated:
        return Outcome.fail(Failure.already_resolved)
    db.refresh(request)
    logger.info("Buddy request %s %s by user %s", pk, request.status.value, responder.id)
    return Outcome.success(request)


@store_guard
def list_sent(db: Session, user_id: int, limit: int = 100) -> list[BuddyRequest]:
    return (
        db.query(BuddyRequest)
        .filter(BuddyRequest.sender_id == user_id)
        .order_by(BuddyRequest.created_at.desc(), BuddyRequest.request_id.desc())
        .limit(limit)
        .all()
    )


@store_guard
def list_received(db: Session, user_id: int, limit: int = 100) -> list[BuddyRequest]:
    return (
        db.query(BuddyRequest)
        .filter(BuddyRequest.receiver_id == user_id)
        .order_by(BuddyRequest.created_at.desc(), BuddyRequest.request_id.desc())
        .limit(limit)
        .all()
    )
