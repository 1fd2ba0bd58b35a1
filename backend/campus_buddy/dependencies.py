"""FastAPI dependencies: clock, session store, and the access gate.

API routes use ``require_identity`` (401 on rejection); page routes use
``require_page_identity`` (redirect to /login). The distinction belongs to
the route, the gate logic is shared.
"""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from campus_buddy.config import settings
from campus_buddy.database import get_db
from campus_buddy.schemas.session import Identity
from campus_buddy.services import access_gate
from campus_buddy.services.outcomes import Failure
from campus_buddy.services.session_store import Clock, SessionStore, utcnow


class AuthenticationRequired(Exception):
    """Raised by the gate dependencies; turned into a 401 or a redirect."""

    def __init__(self, reason: Failure, redirect: bool):
        super().__init__(reason.value)
        self.reason = reason
        self.redirect = redirect


def get_clock() -> Clock:
    return utcnow


def get_session_store(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)) -> SessionStore:
    return SessionStore(db, clock=clock)


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def _gate(store: SessionStore, token: Optional[str], redirect: bool) -> Identity:
    result = access_gate.check(store, token)
    if isinstance(result, access_gate.Rejected):
        raise AuthenticationRequired(result.reason, redirect=redirect)
    return result.identity


def require_identity(
    store: SessionStore = Depends(get_session_store),
    token: Optional[str] = Depends(session_token),
) -> Identity:
    return _gate(store, token, redirect=False)


def require_page_identity(
    store: SessionStore = Depends(get_session_store),
    token: Optional[str] = Depends(session_token),
) -> Identity:
    return _gate(store, token, redirect=True)
