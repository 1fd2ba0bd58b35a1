"""BuddyRequest ORM model."""
import enum
from datetime import datetime, timezone
from sqlalchemy import (
    Column, Integer, DateTime, ForeignKey, CheckConstraint, Index, Enum as SAEnum, text,
)
from campus_buddy.database import Base


class BuddyRequestStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class BuddyRequest(Base):
    __tablename__ = "buddy_requests"

    request_id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(SAEnum(BuddyRequestStatus), nullable=False, default=BuddyRequestStatus.pending)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    responded_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint("sender_id <> receiver_id", name="ck_buddy_request_not_self"),
        # Only one open request per ordered pair; resolved ones may pile up.
        Index(
            "uq_buddy_request_pending_pair",
            "sender_id",
            "receiver_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
    )
