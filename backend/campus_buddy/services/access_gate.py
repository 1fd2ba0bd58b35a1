"""Access gate: decides whether a request carries a live authenticated session.

Authentication is generic and lives here; who may touch which row is decided
by each lifecycle manager. The gate reads the session store and nothing else.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from campus_buddy.schemas.session import Identity
from campus_buddy.services.outcomes import Failure
from campus_buddy.services.session_store import SessionStore, identity_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authenticated:
    identity: Identity


@dataclass(frozen=True)
class Rejected:
    reason: Failure  # Failure.no_session or Failure.expired


GateResult = Union[Authenticated, Rejected]


def check(store: SessionStore, token: Optional[str]) -> GateResult:
    record = store.get_record(token)
    if record is None:
        logger.debug("Gate rejected request: no session")
        return Rejected(Failure.no_session)
    anonymous = record.user_id is None
    if store.is_expired(record):
        # Expired bindings are dropped the first time they are presented.
        store.destroy(token)
        logger.debug("Gate rejected request: session expired")
        return Rejected(Failure.no_session if anonymous else Failure.expired)
    if anonymous:
        logger.debug("Gate rejected request: anonymous session")
        return Rejected(Failure.no_session)
    return Authenticated(identity_of(record))
