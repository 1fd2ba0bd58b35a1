"""Interest and course catalogs, and which entries each user has picked.

Catalog rows are maintained by staff (``add_interest`` / ``add_course``);
users only attach themselves to existing entries. Attaching twice is a no-op.
"""
import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_buddy.models.course import Course, UserCourse
from campus_buddy.models.interest import Interest, UserInterest
from campus_buddy.models.user import User
from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import Failure, Outcome, parse_id, store_guard

logger = logging.getLogger(__name__)


def _existing_user_id(db: Session, user_id: Any) -> Optional[int]:
    pk = parse_id(user_id)
    if pk is None or db.get(User, pk) is None:
        return None
    return pk


# ── Interests ────────────────────────────────────────────────────────


@store_guard
def add_interest(db: Session, name: str) -> Interest:
    name = name.strip()
    existing = db.query(Interest).filter(Interest.name == name).first()
    if existing is not None:
        return existing
    interest = Interest(name=name)
    db.add(interest)
    db.commit()
    db.refresh(interest)
    logger.info("Added interest '%s' (%s)", name, interest.interest_id)
    return interest


@store_guard
def list_interests(db: Session) -> list[Interest]:
    return db.query(Interest).order_by(Interest.name, Interest.interest_id).all()


@store_guard
def interests_for_user(db: Session, user_id: Any) -> Outcome[list[Interest]]:
    pk = _existing_user_id(db, user_id)
    if pk is None:
        return Outcome.fail(Failure.not_found)
    interests = (
        db.query(Interest)
        .join(UserInterest, UserInterest.interest_id == Interest.interest_id)
        .filter(UserInterest.user_id == pk)
        .order_by(Interest.name, Interest.interest_id)
        .all()
    )
    return Outcome.success(interests)


@store_guard
def pick_interest(db: Session, identity: Identity, interest_id: Any) -> Outcome[Interest]:
    pk = parse_id(interest_id)
    interest = db.get(Interest, pk) if pk is not None else None
    if interest is None:
        return Outcome.fail(Failure.not_found)
    if db.get(UserInterest, (identity.id, pk)) is not None:
        return Outcome.success(interest)

    db.add(UserInterest(user_id=identity.id, interest_id=pk))
    try:
        db.commit()
    except IntegrityError:
        # Picked concurrently; the row is there either way.
        db.rollback()
    logger.info("User %s picked interest %s", identity.id, pk)
    return Outcome.success(db.get(Interest, pk))


# ── Courses ──────────────────────────────────────────────────────────


@store_guard
def add_course(db: Session, code: str, title: str, description: Optional[str] = None) -> Course:
    code = code.strip().upper()
    existing = db.query(Course).filter(Course.code == code).first()
    if existing is not None:
        return existing
    course = Course(code=code, title=title, description=description)
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info("Added course %s (%s)", code, course.course_id)
    return course


@store_guard
def list_courses(db: Session) -> list[Course]:
    return db.query(Course).order_by(Course.code).all()


@store_guard
def courses_for_user(db: Session, user_id: Any) -> Outcome[list[Course]]:
    pk = _existing_user_id(db, user_id)
    if pk is None:
        return Outcome.fail(Failure.not_found)
    courses = (
        db.query(Course)
        .join(UserCourse, UserCourse.course_id == Course.course_id)
        .filter(UserCourse.user_id == pk)
        .order_by(Course.code)
        .all()
    )
    return Outcome.success(courses)


@store_guard
def enrol(db: Session, identity: Identity, course_id: Any) -> Outcome[Course]:
    pk = parse_id(course_id)
    course = db.get(Course, pk) if pk is not None else None
    if course is None:
        return Outcome.fail(Failure.not_found)
    if db.get(UserCourse, (identity.id, pk)) is not None:
        return Outcome.success(course)

    db.add(UserCourse(user_id=identity.id, course_id=pk))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
    logger.info("User %s enrolled in course %s", identity.id, pk)
    return Outcome.success(db.get(Course, pk))
