"""Pytest fixtures: a fresh SQLite database file per test and a controllable clock."""
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from campus_buddy.database import Base, get_db
from campus_buddy.dependencies import get_clock
from campus_buddy.main import app
from campus_buddy.schemas.session import Identity

# Import all models so they register with Base.metadata
import campus_buddy.models  # noqa: F401

DEFAULT_PASSWORD = "correct horse battery staple"


class FrozenClock:
    """Clock that only moves when a test says so."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(scope="function")
def clock():
    return FrozenClock(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})

    # Enable WAL mode so the test session and request sessions do not block each other
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory, clock):
    """FastAPI TestClient with the database and clock dependencies overridden."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: drive the registration / login forms like a browser would
# ---------------------------------------------------------------------------
def register_user(client: TestClient, email: str, name: str = "Test User", password: str = DEFAULT_PASSWORD, **profile):
    """POST /register and return the (unfollowed) redirect response."""
    form = {"email": email, "password": password, "fullName": name}
    form.update(profile)
    return client.post("/register", data=form, follow_redirects=False)


def login(client: TestClient, email: str, password: str = DEFAULT_PASSWORD):
    """POST /login; on success the client's cookie now carries the new session."""
    return client.post("/login", data={"email": email, "password": password}, follow_redirects=False)


def signup_and_login(client: TestClient, email: str, name: str = "Test User") -> Identity:
    """Register, log in, and return the identity the session now carries."""
    resp = register_user(client, email, name)
    assert resp.status_code == 303, resp.text
    resp = login(client, email)
    assert resp.status_code == 303, resp.text
    dashboard = client.get("/dashboard")
    assert dashboard.status_code == 200, dashboard.text
    return Identity(**dashboard.json()["user"])


def create_test_event(client: TestClient, title: str = "Study Group", date: str = "2026-10-25", **extra) -> dict:
    """POST /api/events as the logged-in user and return response JSON."""
    payload = {"title": title, "date": date}
    payload.update(extra)
    resp = client.post("/api/events/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()
