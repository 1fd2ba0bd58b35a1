"""Tests for the access gate: NoSession / Expired / Authenticated."""
from campus_buddy.schemas.session import Identity
from campus_buddy.services import access_gate
from campus_buddy.services.outcomes import Failure
from campus_buddy.services.session_store import SessionStore
from tests.conftest import signup_and_login

BOB = Identity(id=7, email="bob@campus.test", display_name="Bob")


class TestGateDecision:
    """access_gate.check on its own."""

    def test_no_token(self, db, clock):
        result = access_gate.check(SessionStore(db, clock=clock), None)
        assert result == access_gate.Rejected(Failure.no_session)

    def test_unknown_token(self, db, clock):
        result = access_gate.check(SessionStore(db, clock=clock), "forged")
        assert result == access_gate.Rejected(Failure.no_session)

    def test_anonymous_session_is_not_authenticated(self, db, clock):
        store = SessionStore(db, clock=clock)
        token = store.create_anonymous()
        assert access_gate.check(store, token) == access_gate.Rejected(Failure.no_session)

    def test_expired_anonymous_session_is_dropped(self, db, clock):
        store = SessionStore(db, clock=clock)
        token = store.create_anonymous()
        clock.advance(hours=1)

        assert access_gate.check(store, token) == access_gate.Rejected(Failure.no_session)
        assert store.get_record(token) is None

    def test_live_session(self, db, clock):
        store = SessionStore(db, clock=clock)
        token = store.create(BOB)
        assert access_gate.check(store, token) == access_gate.Authenticated(BOB)

    def test_expired_session_is_rejected_and_dropped(self, db, clock):
        store = SessionStore(db, clock=clock)
        token = store.create(BOB)
        clock.advance(hours=1)

        assert access_gate.check(store, token) == access_gate.Rejected(Failure.expired)
        assert store.get_record(token) is None
        # Presented again it is simply unknown.
        assert access_gate.check(store, token) == access_gate.Rejected(Failure.no_session)


class TestGateOnRoutes:
    """API routes answer 401, page routes redirect to /login."""

    def test_api_without_session_is_401(self, client):
        resp = client.get("/api/notifications/")
        assert resp.status_code == 401
        assert resp.json()["reason"] == "NoSession"

    def test_page_without_session_redirects(self, client):
        resp = client.get("/dashboard", follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/login"

    def test_form_post_without_session_redirects(self, client):
        resp = client.post("/events/join/1", follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/login"

    def test_expired_session_on_api(self, client, clock):
        signup_and_login(client, "carol@campus.test", "Carol")
        assert client.get("/api/notifications/").status_code == 200

        clock.advance(hours=1)
        resp = client.get("/api/notifications/")
        assert resp.status_code == 401
        assert resp.json()["reason"] == "Expired"

    def test_expired_session_on_page(self, client, clock):
        signup_and_login(client, "dave@campus.test", "Dave")
        clock.advance(hours=2)
        resp = client.get("/dashboard", follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/login"

    def test_unauthenticated_routes_stay_open(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}
        assert client.get("/login").status_code == 200
        assert client.get("/register").status_code == 200
        resp = client.get("/", follow_redirects=False)
        assert resp.status_code == 302
        assert resp.headers["location"] == "/login"
