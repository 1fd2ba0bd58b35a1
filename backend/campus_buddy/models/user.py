"""User ORM model: account, credentials and profile attributes."""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from campus_buddy.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(100), nullable=False)
    interests = Column(Text, nullable=True)
    hobbies = Column(Text, nullable=True)
    academic_info = Column(Text, nullable=True)
    available_time = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Events outlive their creator (creator_id is nulled); everything else goes with the user.
    events_created = relationship("Event", back_populates="creator")
    participations = relationship("EventParticipant", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", cascade="all, delete-orphan")
    sessions = relationship("UserSession", cascade="all, delete-orphan")
    sent_buddy_requests = relationship(
        "BuddyRequest", foreign_keys="BuddyRequest.sender_id", cascade="all, delete-orphan"
    )
    received_buddy_requests = relationship(
        "BuddyRequest", foreign_keys="BuddyRequest.receiver_id", cascade="all, delete-orphan"
    )
    sent_messages = relationship("Message", foreign_keys="Message.sender_id", cascade="all, delete-orphan")
    received_messages = relationship("Message", foreign_keys="Message.receiver_id", cascade="all, delete-orphan")
    interest_links = relationship("UserInterest", cascade="all, delete-orphan")
    course_links = relationship("UserCourse", cascade="all, delete-orphan")
