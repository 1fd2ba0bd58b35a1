"""Tests for events and the join transition."""
from datetime import date, datetime, timezone

from campus_buddy.models.participant import EventParticipant
from campus_buddy.schemas.session import Identity
from campus_buddy.services import event_service, participation_service
from campus_buddy.services.outcomes import Failure
from tests.conftest import create_test_event, signup_and_login


def _make_user_and_event(db):
    from campus_buddy.models.user import User
    db.add(User(user_id=1, email="host@campus.test", password_hash="x", display_name="Host"))
    db.commit()
    host = Identity(id=1, email="host@campus.test", display_name="Host")
    event = event_service.create_event(db, host, "Board games", date(2026, 11, 1))
    return host, event


class TestJoin:
    """participation_service.join."""

    def test_join_twice(self, db):
        host, event = _make_user_and_event(db)
        assert participation_service.join(db, event.event_id, host).ok
        assert participation_service.join(db, event.event_id, host).failure == Failure.already_joined
        assert db.query(EventParticipant).count() == 1

    def test_join_unknown_event(self, db):
        host, _ = _make_user_and_event(db)
        assert participation_service.join(db, 404, host).failure == Failure.event_not_found
        assert participation_service.join(db, "nope", host).failure == Failure.event_not_found
        assert db.query(EventParticipant).count() == 0

    def test_store_constraint_catches_racing_join(self, db, session_factory, monkeypatch):
        """Two joins that both pass the pre-check: the primary key stops the second."""
        host, event = _make_user_and_event(db)
        monkeypatch.setattr(participation_service, "_already_joined", lambda *args: False)

        assert participation_service.join(db, event.event_id, host).ok

        other_worker = session_factory()
        try:
            outcome = participation_service.join(other_worker, event.event_id, host)
        finally:
            other_worker.close()
        assert outcome.failure == Failure.already_joined
        assert db.query(EventParticipant).count() == 1

    def test_participants_listed(self, db):
        host, event = _make_user_and_event(db)
        participation_service.join(db, event.event_id, host)
        participants = participation_service.list_participants(db, event.event_id)
        assert [p.user_id for p in participants] == [host.id]
        assert participation_service.list_participants(db, "bogus") == []


class TestUpcoming:
    """Upcoming events are decided on the campus calendar date."""

    def test_campus_today_crosses_midnight(self):
        late_evening_utc = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)
        assert event_service.campus_today(late_evening_utc, "Europe/London") == date(2026, 10, 20)
        assert event_service.campus_today(late_evening_utc, "UTC") == date(2026, 10, 19)

    def test_naive_now_is_treated_as_utc(self):
        assert event_service.campus_today(datetime(2026, 10, 19, 23, 30), "UTC") == date(2026, 10, 19)

    def test_upcoming_excludes_past_events(self, client, clock):
        signup_and_login(client, "uma@campus.test", "Uma")
        create_test_event(client, title="Yesterday", date="2026-10-18")
        create_test_event(client, title="Later", date="2026-11-02")
        create_test_event(client, title="Today", date="2026-10-19", time="18:00:00")

        titles = [e["title"] for e in client.get("/api/events/upcoming").json()]
        assert titles == ["Today", "Later"]

        dashboard_titles = [e["title"] for e in client.get("/dashboard").json()["events"]]
        assert dashboard_titles == ["Today", "Later"]


class TestEventRoutes:
    """Event API and form routes."""

    def test_create_and_get(self, client):
        me = signup_and_login(client, "vera@campus.test", "Vera")
        event = create_test_event(client, title="Hackathon", location="Library", description="Bring laptops")
        assert event["creator_id"] == me.id
        assert event["participants"] == []

        resp = client.get(f"/api/events/{event['event_id']}")
        assert resp.status_code == 200
        assert resp.json()["location"] == "Library"
        assert len(client.get("/api/events/").json()) == 1

    def test_get_missing_event(self, client):
        signup_and_login(client, "walt@campus.test", "Walt")
        assert client.get("/api/events/12345").status_code == 404
        assert client.get("/api/events/not-an-id").status_code == 404
        assert client.get("/events/12345").status_code == 404

    def test_api_join_twice(self, client):
        me = signup_and_login(client, "xena@campus.test", "Xena")
        event = create_test_event(client)

        resp = client.post(f"/api/events/{event['event_id']}/join")
        assert resp.status_code == 201
        assert resp.json()["user_id"] == me.id

        resp = client.post(f"/api/events/{event['event_id']}/join")
        assert resp.status_code == 409
        assert resp.json()["detail"]["error"] == "AlreadyJoined"

        participants = client.get(f"/api/events/{event['event_id']}/participants").json()
        assert [p["user_id"] for p in participants] == [me.id]

    def test_api_join_missing_event(self, client):
        signup_and_login(client, "yuri@campus.test", "Yuri")
        resp = client.post("/api/events/999/join")
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "EventNotFound"

    def test_form_join_redirects_both_times(self, client):
        """A double-clicked Join button lands on the event page twice, one row."""
        signup_and_login(client, "zoe@campus.test", "Zoe")
        event = create_test_event(client)
        for _ in range(2):
            resp = client.post(f"/events/join/{event['event_id']}", follow_redirects=False)
            assert resp.status_code == 303
            assert resp.headers["location"] == f"/events/{event['event_id']}"

        page = client.get(f"/events/{event['event_id']}").json()
        assert len(page["event"]["participants"]) == 1

    def test_form_join_missing_event(self, client):
        signup_and_login(client, "adam@campus.test", "Adam")
        assert client.post("/events/join/999", follow_redirects=False).status_code == 404

    def test_creating_event_requires_session(self, client):
        resp = client.post("/api/events/", json={"title": "Sneaky", "date": "2026-10-25"})
        assert resp.status_code == 401

    def test_form_create_redirects_to_event_list(self, client):
        me = signup_and_login(client, "bea@campus.test", "Bea")
        form = {"title": "Pub quiz", "date": "2026-10-30", "time": "19:30", "location": "Union bar", "description": ""}
        resp = client.post("/events/create", data=form, follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/events"

        events = client.get("/events").json()["events"]
        assert [e["title"] for e in events] == ["Pub quiz"]
        assert events[0]["creator_id"] == me.id
        assert events[0]["time"] == "19:30:00"

    def test_form_create_blank_time_is_no_time(self, client):
        signup_and_login(client, "cy@campus.test", "Cy")
        resp = client.post("/events/create", data={"title": "Picnic", "date": "2026-10-31", "time": ""},
                           follow_redirects=False)
        assert resp.status_code == 303
        assert client.get("/events").json()["events"][0]["time"] is None

    def test_form_create_without_session_redirects(self, client):
        resp = client.post("/events/create", data={"title": "Sneaky", "date": "2026-10-25"}, follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/login"
