"""UserSession ORM model: server side of the session cookie.

Only a SHA-256 digest of the token is stored. ``user_id`` is NULL for
anonymous sessions that exist just to carry flash messages.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey
from campus_buddy.database import Base


class UserSession(Base):
    __tablename__ = "user_sessions"

    token_hash = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=True, index=True)
    email = Column(String(255), nullable=True)
    display_name = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    flash = Column(JSON, nullable=False, default=dict)
    # Bumped on every write to ``flash``; a take only clears the version it read.
    flash_version = Column(Integer, nullable=False, default=0, server_default="0")
