"""Discriminated results for lifecycle operations, and the one real fault.

Managers never raise for business-rule rejections: they return an
``Outcome`` that is either a success (optionally carrying a value) or exactly
one ``Failure``. Only an unreachable store escapes as ``StoreUnavailable``.
"""
import enum
import functools
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy.exc import DisconnectionError, OperationalError, TimeoutError as PoolTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Failure(str, enum.Enum):
    no_session = "NoSession"
    expired = "Expired"
    unauthorized = "Unauthorized"
    not_found = "NotFound"
    event_not_found = "EventNotFound"
    already_joined = "AlreadyJoined"
    self_request = "SelfRequest"
    duplicate_pending = "DuplicatePending"
    already_resolved = "AlreadyResolved"
    email_in_use = "EmailInUse"
    invalid_credentials = "InvalidCredentials"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)


class StoreUnavailable(Exception):
    """The relational store did not answer; nothing was applied."""


def store_guard(func):
    """Translate driver-level connectivity errors into ``StoreUnavailable``.

    The wrapped function must take the SQLAlchemy session as its first
    argument (or be a method whose instance exposes it as ``db``).
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except (OperationalError, DisconnectionError, PoolTimeoutError) as exc:
            db = getattr(args[0], "db", args[0]) if args else kwargs.get("db")
            if db is not None and hasattr(db, "rollback"):
                try:
                    db.rollback()
                except (OperationalError, DisconnectionError):
                    logger.warning("Rollback failed after store error in %s", func.__name__)
            logger.error("Store unavailable during %s: %s", func.__name__, exc)
            raise StoreUnavailable(str(exc)) from exc

    return wrapper


def parse_id(raw: Any) -> Optional[int]:
    """Coerce a path segment into a primary key; None when it cannot be one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if not isinstance(raw, str):
        return None
    # Plain ASCII digits only: no sign, no underscores, no other scripts.
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if value > 0 else None
