"""Import every model so Base.metadata knows about all tables."""
from campus_buddy.models.user import User  # noqa: F401
from campus_buddy.models.event import Event  # noqa: F401
from campus_buddy.models.participant import EventParticipant  # noqa: F401
from campus_buddy.models.notification import Notification  # noqa: F401
from campus_buddy.models.buddy_request import BuddyRequest, BuddyRequestStatus  # noqa: F401
from campus_buddy.models.message import Message  # noqa: F401
from campus_buddy.models.session import UserSession  # noqa: F401
from campus_buddy.models.interest import Interest, UserInterest  # noqa: F401
from campus_buddy.models.course import Course, UserCourse  # noqa: F401
