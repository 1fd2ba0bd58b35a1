"""Direct messages between users. The sender is always the caller's identity."""
import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from campus_buddy.models.message import Message
from campus_buddy.models.user import User
from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import Failure, Outcome, parse_id, store_guard

logger = logging.getLogger(__name__)


@store_guard
def send_message(db: Session, sender: Identity, receiver_id: Any, content: str) -> Outcome[Message]:
    pk = parse_id(receiver_id)
    if pk is None or db.get(User, pk) is None:
        return Outcome.fail(Failure.not_found)
    message = Message(sender_id=sender.id, receiver_id=pk, content=content)
    db.add(message)
    db.commit()
    db.refresh(message)
    logger.info("Message %s sent %s -> %s", message.message_id, sender.id, pk)
    return Outcome.success(message)


@store_guard
def list_messages(db: Session, user_id: int, limit: int = 100) -> list[Message]:
    """Messages sent or received by ``user_id``, newest first."""
    return (
        db.query(Message)
        .filter(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
        .order_by(Message.sent_at.desc(), Message.message_id.desc())
        .limit(limit)
        .all()
    )
