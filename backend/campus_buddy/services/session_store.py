"""Session store: opaque tokens bound to an identity snapshot and a flash slot.

Bindings live in the ``user_sessions`` table so every worker process sees the
same sessions. Time comes from an injected clock, which keeps expiry
deterministic under test. Expiry is fixed at creation; reads never extend it.
"""
import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from campus_buddy.config import settings
from campus_buddy.models.session import UserSession
from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import store_guard

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
FlashMessages = dict[str, list[str]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every stored value is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionStore:
    """Keyed store of active sessions."""

    def __init__(self, db: Session, clock: Clock = utcnow, ttl_seconds: Optional[int] = None):
        self.db = db
        self.clock = clock
        self.ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else settings.SESSION_TTL_SECONDS)

    # ── lifecycle ────────────────────────────────────────────────────

    def _delete_expired(self) -> int:
        return self.db.query(UserSession).filter(UserSession.expires_at <= self.clock()).delete(
            synchronize_session=False
        )

    @store_guard
    def create(self, identity: Optional[Identity]) -> str:
        """Bind a fresh token to ``identity`` (None for an anonymous session).

        Bindings that have already expired are swept in the same commit.
        """
        token = secrets.token_urlsafe(32)
        now = self.clock()
        purged = self._delete_expired()
        record = UserSession(
            token_hash=_digest(token),
            user_id=identity.id if identity else None,
            email=identity.email if identity else None,
            display_name=identity.display_name if identity else None,
            created_at=now,
            expires_at=now + self.ttl,
            flash={},
        )
        self.db.add(record)
        self.db.commit()
        if purged:
            logger.info("Purged %d expired sessions", purged)
        if identity:
            logger.info("Session created for user %s", identity.id)
        return token

    def create_anonymous(self) -> str:
        return self.create(None)

    @store_guard
    def destroy(self, token: Optional[str]) -> None:
        """Remove the binding; destroying an unknown token is a no-op."""
        if not token:
            return
        self.db.query(UserSession).filter(UserSession.token_hash == _digest(token)).delete(
            synchronize_session=False
        )
        self.db.commit()

    @store_guard
    def purge_expired(self) -> int:
        removed = self._delete_expired()
        self.db.commit()
        if removed:
            logger.info("Purged %d expired sessions", removed)
        return removed

    # ── reads ────────────────────────────────────────────────────────

    @store_guard
    def get_record(self, token: Optional[str]) -> Optional[UserSession]:
        """Raw binding for ``token`` regardless of expiry, or None."""
        if not token:
            return None
        return self.db.query(UserSession).filter(UserSession.token_hash == _digest(token)).first()

    def is_expired(self, record: UserSession) -> bool:
        return self.clock() >= _as_utc(record.expires_at)

    def lookup(self, token: Optional[str]) -> Optional[Identity]:
        """Identity bound to a live, authenticated session, else None."""
        record = self.get_record(token)
        if record is None or record.user_id is None or self.is_expired(record):
            return None
        return identity_of(record)

    def is_live(self, token: Optional[str]) -> bool:
        """True for any unexpired session, anonymous ones included."""
        record = self.get_record(token)
        return record is not None and not self.is_expired(record)

    # ── flash ────────────────────────────────────────────────────────

    def _live_record(self, token: Optional[str]) -> Optional[UserSession]:
        """Unexpired binding for ``token``; an expired one is deleted on sight."""
        if not token:
            return None
        record = self.db.query(UserSession).filter(UserSession.token_hash == _digest(token)).first()
        if record is None:
            return None
        if self.is_expired(record):
            self.db.delete(record)
            self.db.commit()
            return None
        return record

    @store_guard
    def set_flash(self, token: str, messages: FlashMessages) -> None:
        record = self._live_record(token)
        if record is None:
            return
        record.flash = {severity: list(lines) for severity, lines in messages.items()}
        record.flash_version = (record.flash_version or 0) + 1
        self.db.commit()

    @store_guard
    def take_flash(self, token: Optional[str]) -> FlashMessages:
        """Return the pending flash messages and clear them.

        The clear only applies if nobody touched the flash since it was read,
        so concurrent readers cannot both receive the same messages.
        """
        record = self._live_record(token)
        if record is None:
            return {}
        messages = dict(record.flash or {})
        if not messages:
            self.db.rollback()
            return {}
        claimed = (
            self.db.query(UserSession)
            .filter(
                UserSession.token_hash == record.token_hash,
                UserSession.flash_version == record.flash_version,
            )
            .update(
                {"flash": {}, "flash_version": UserSession.flash_version + 1},
                synchronize_session=False,
            )
        )
        self.db.commit()
        if not claimed:
            logger.debug("Flash already taken by a concurrent request")
            return {}
        return messages


def identity_of(record: UserSession) -> Identity:
    return Identity(id=record.user_id, email=record.email, display_name=record.display_name)
