"""Browser-facing routes: login, registration, dashboard and form posts.

Unauthenticated visitors are redirected to /login. Form submissions answer
with a 303 so the browser follows up with a GET.
"""
import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from campus_buddy.config import settings
from campus_buddy.database import get_db
from campus_buddy.dependencies import get_clock, get_session_store, require_page_identity, session_token
from campus_buddy.routers.common import unwrap
from campus_buddy.schemas.event import EventOut
from campus_buddy.schemas.notification import NotificationOut
from campus_buddy.schemas.page import AuthPageOut, DashboardOut, EventPageOut, EventsPageOut
from campus_buddy.schemas.session import Identity
from campus_buddy.services import event_service, notification_service, participation_service, user_service
from campus_buddy.services.outcomes import Failure, parse_id
from campus_buddy.services.session_store import Clock, SessionStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _redirect(url: str, code: int = status.HTTP_303_SEE_OTHER) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=code)


def _set_session_cookie(response: RedirectResponse, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def _flash_and_redirect(store: SessionStore, token: Optional[str], messages: dict, url: str) -> RedirectResponse:
    """Queue flash messages on the visitor's session, creating one if needed."""
    response = _redirect(url)
    if not store.is_live(token):
        token = store.create_anonymous()
        _set_session_cookie(response, token)
    store.set_flash(token, messages)
    return response


# ── Landing / auth pages ─────────────────────────────────────────────


@router.get("/")
def landing(store: SessionStore = Depends(get_session_store), token: Optional[str] = Depends(session_token)):
    if store.lookup(token):
        return _redirect("/dashboard", status.HTTP_302_FOUND)
    return _redirect("/login", status.HTTP_302_FOUND)


@router.get("/login", response_model=AuthPageOut)
def login_page(store: SessionStore = Depends(get_session_store), token: Optional[str] = Depends(session_token)):
    return AuthPageOut(page="login", messages=store.take_flash(token))


@router.post("/login")
def login(
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    token: Optional[str] = Depends(session_token),
):
    outcome = user_service.authenticate(db, email, password)
    if not outcome.ok:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    # A fresh token on every login; whatever the visitor held before is dropped.
    store.destroy(token)
    new_token = store.create(outcome.value)
    response = _redirect("/dashboard")
    _set_session_cookie(response, new_token)
    logger.info("User %s logged in", outcome.value.id)
    return response


@router.get("/register", response_model=AuthPageOut)
def register_page(store: SessionStore = Depends(get_session_store), token: Optional[str] = Depends(session_token)):
    return AuthPageOut(page="register", messages=store.take_flash(token))


@router.post("/register")
def register(
    email: str = Form(...),
    password: str = Form(..., min_length=1),
    full_name: str = Form(..., alias="fullName"),
    interests: Optional[str] = Form(None),
    hobbies: Optional[str] = Form(None),
    academic_info: Optional[str] = Form(None),
    time_frames: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
    token: Optional[str] = Depends(session_token),
):
    outcome = user_service.register(
        db,
        email=email,
        password=password,
        display_name=full_name,
        interests=interests,
        hobbies=hobbies,
        academic_info=academic_info,
        available_time=time_frames,
    )
    if outcome.failure == Failure.email_in_use:
        return _flash_and_redirect(store, token, {"error": ["Email already in use."]}, "/register")
    unwrap(outcome)
    return _flash_and_redirect(store, token, {"success": ["Registration successful. Please log in."]}, "/login")


@router.get("/logout")
def logout(store: SessionStore = Depends(get_session_store), token: Optional[str] = Depends(session_token)):
    store.destroy(token)
    response = _redirect("/", status.HTTP_302_FOUND)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


# ── Authenticated pages ──────────────────────────────────────────────


@router.get("/dashboard", response_model=DashboardOut)
def dashboard(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    identity: Identity = Depends(require_page_identity),
):
    return DashboardOut(
        user=identity,
        notifications=[
            NotificationOut.model_validate(n) for n in notification_service.list_for_user(db, identity.id)
        ],
        events=[EventOut.model_validate(e) for e in event_service.upcoming_events(db, clock())],
    )


@router.get("/events", response_model=EventsPageOut)
def events_page(db: Session = Depends(get_db), identity: Identity = Depends(require_page_identity)):
    return EventsPageOut(events=[EventOut.model_validate(e) for e in event_service.list_events(db)])


@router.post("/events/create")
def create_event_form(
    title: str = Form(..., min_length=1, max_length=255),
    event_date: dt.date = Form(..., alias="date"),
    event_time: Optional[dt.time] = Form(None, alias="time"),
    description: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_page_identity),
):
    """The creator is always the session identity, never a form field."""
    event_service.create_event(
        db=db,
        creator=identity,
        title=title,
        event_date=event_date,
        event_time=event_time,
        description=description,
        location=location,
    )
    return _redirect("/events")


@router.get("/events/{event_id}", response_model=EventPageOut)
def event_page(event_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_page_identity)):
    event = event_service.get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return EventPageOut(event=EventOut.model_validate(event))


@router.post("/events/join/{event_id}")
def join_event_form(event_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_page_identity)):
    outcome = participation_service.join(db, event_id, identity)
    if outcome.failure == Failure.event_not_found:
        unwrap(outcome)
    # Joined now or already a participant: either way, back to the event page.
    return _redirect(f"/events/{parse_id(event_id)}")


@router.post("/notifications/mark-as-read/{notification_id}")
def mark_read_form(
    notification_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_page_identity),
):
    unwrap(notification_service.mark_read(db, notification_id, identity))
    return _redirect("/dashboard")


@router.post("/notifications/delete/{notification_id}")
def delete_notification_form(
    notification_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_page_identity),
):
    outcome = notification_service.delete(db, notification_id, identity)
    if outcome.failure != Failure.not_found:
        unwrap(outcome)
    return _redirect("/dashboard")
