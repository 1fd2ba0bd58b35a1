"""User accounts: registration, login verification, profile edits, deletion."""
import logging
from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_buddy.models.user import User
from campus_buddy.schemas.session import Identity
from campus_buddy.services import credentials
from campus_buddy.services.outcomes import Failure, Outcome, parse_id, store_guard

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("display_name", "interests", "hobbies", "academic_info", "available_time")
# Columns that cannot be cleared; a null here means "leave unchanged".
_REQUIRED_FIELDS = ("display_name",)


def _normalise_email(email: str) -> str:
    return email.strip().lower()


def identity_for(user: User) -> Identity:
    return Identity(id=user.user_id, email=user.email, display_name=user.display_name)


@store_guard
def find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == _normalise_email(email)).first()


@store_guard
def register(
    db: Session,
    email: str,
    password: str,
    display_name: str,
    interests: Optional[str] = None,
    hobbies: Optional[str] = None,
    academic_info: Optional[str] = None,
    available_time: Optional[str] = None,
) -> Outcome[User]:
    email = _normalise_email(email)
    if db.query(User).filter(User.email == email).first() is not None:
        logger.info("Registration refused: email already in use")
        return Outcome.fail(Failure.email_in_use)

    user = User(
        email=email,
        password_hash=credentials.hash_password(password),
        display_name=display_name,
        interests=interests,
        hobbies=hobbies,
        academic_info=academic_info,
        available_time=available_time,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Registration refused by store: email already in use")
        return Outcome.fail(Failure.email_in_use)
    db.refresh(user)
    logger.info("Registered user %s", user.user_id)
    return Outcome.success(user)


def authenticate(db: Session, email: str, password: str) -> Outcome[Identity]:
    """Check credentials; unknown e-mail and wrong password look the same."""
    user = find_by_email(db, email)
    if user is None or not credentials.verify_password(password, user.password_hash):
        logger.info("Login failed")
        return Outcome.fail(Failure.invalid_credentials)
    return Outcome.success(identity_for(user))


@store_guard
def get_user(db: Session, user_id: Any) -> Optional[User]:
    pk = parse_id(user_id)
    if pk is None:
        return None
    return db.get(User, pk)


@store_guard
def search_users(db: Session, query: str, limit: int = 50) -> list[User]:
    """Match display name, e-mail, interests or hobbies (case-insensitive)."""
    term = query.strip()
    if not term:
        return []
    pattern = f"%{term}%"
    return (
        db.query(User)
        .filter(
            or_(
                User.display_name.ilike(pattern),
                User.email.ilike(pattern),
                User.interests.ilike(pattern),
                User.hobbies.ilike(pattern),
            )
        )
        .order_by(User.display_name, User.user_id)
        .limit(limit)
        .all()
    )


@store_guard
def update_profile(db: Session, identity: Identity, updates: dict[str, Any]) -> Outcome[User]:
    user = db.get(User, identity.id)
    if user is None:
        return Outcome.fail(Failure.not_found)
    for field, value in updates.items():
        if field not in _PROFILE_FIELDS:
            continue
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("Updated profile of user %s", user.user_id)
    return Outcome.success(user)


@store_guard
def delete_user(db: Session, user_id: Any, identity: Identity) -> Outcome[None]:
    """Delete an account; only its owner may do so. Owned rows go with it."""
    pk = parse_id(user_id)
    user = db.get(User, pk) if pk is not None else None
    if user is None:
        return Outcome.fail(Failure.not_found)
    if user.user_id != identity.id:
        logger.info("User %s denied deletion of user %s", identity.id, pk)
        return Outcome.fail(Failure.unauthorized)
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s", pk)
    return Outcome.success()
