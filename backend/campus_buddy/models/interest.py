"""Interest catalog and the interests each user has picked."""
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from campus_buddy.database import Base


class Interest(Base):
    __tablename__ = "interests"

    interest_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)


class UserInterest(Base):
    __tablename__ = "user_interests"

    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    interest_id = Column(Integer, ForeignKey("interests.interest_id", ondelete="CASCADE"), primary_key=True)

    interest = relationship("Interest")
