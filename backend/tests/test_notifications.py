"""Tests for the notification lifecycle: owner-only, monotonic read flag."""
import pytest

from campus_buddy.models.notification import Notification
from campus_buddy.schemas.session import Identity
from campus_buddy.services import notification_service
from campus_buddy.services.outcomes import Failure
from tests.conftest import signup_and_login

OWNER = Identity(id=1, email="owner@campus.test", display_name="Owner")
STRANGER = Identity(id=2, email="stranger@campus.test", display_name="Stranger")


@pytest.fixture
def users(db):
    from campus_buddy.models.user import User
    for identity in (OWNER, STRANGER):
        db.add(User(user_id=identity.id, email=identity.email, password_hash="x", display_name=identity.display_name))
    db.commit()


class TestMarkRead:
    """notification_service.mark_read."""

    @pytest.mark.parametrize("times", [1, 2, 5])
    def test_idempotent_for_owner(self, db, users, times):
        n = notification_service.create_notification(db, OWNER.id, "New buddy request")
        for _ in range(times):
            outcome = notification_service.mark_read(db, n.notification_id, OWNER)
            assert outcome.ok
            assert outcome.value.is_read is True
        db.expire_all()
        assert db.get(Notification, n.notification_id).is_read is True

    def test_other_identity_always_unauthorized(self, db, users):
        n = notification_service.create_notification(db, OWNER.id, "Hello")
        for _ in range(3):
            assert notification_service.mark_read(db, n.notification_id, STRANGER).failure == Failure.unauthorized
        db.expire_all()
        assert db.get(Notification, n.notification_id).is_read is False

    def test_unauthorized_even_after_owner_read_it(self, db, users):
        n = notification_service.create_notification(db, OWNER.id, "Hello")
        notification_service.mark_read(db, n.notification_id, OWNER)
        assert notification_service.mark_read(db, n.notification_id, STRANGER).failure == Failure.unauthorized

    @pytest.mark.parametrize("bad_id", [999, "999", "abc", "", -1, None])
    def test_not_found(self, db, users, bad_id):
        assert notification_service.mark_read(db, bad_id, OWNER).failure == Failure.not_found

    def test_new_notifications_are_unread(self, db, users):
        n = notification_service.create_notification(db, OWNER.id, "Hello")
        assert n.is_read is False


class TestDelete:
    """notification_service.delete."""

    def test_delete_then_not_found(self, db, users):
        n = notification_service.create_notification(db, OWNER.id, "Bye")
        nid = n.notification_id
        assert notification_service.delete(db, nid, OWNER).ok
        assert notification_service.delete(db, nid, OWNER).failure == Failure.not_found
        assert db.query(Notification).count() == 0

    def test_stranger_cannot_delete(self, db, users):
        n = notification_service.create_notification(db, OWNER.id, "Mine")
        assert notification_service.delete(db, n.notification_id, STRANGER).failure == Failure.unauthorized
        assert db.query(Notification).count() == 1

    def test_list_newest_first(self, db, users):
        first = notification_service.create_notification(db, OWNER.id, "first")
        second = notification_service.create_notification(db, OWNER.id, "second")
        notification_service.create_notification(db, STRANGER.id, "not yours")
        listed = notification_service.list_for_user(db, OWNER.id)
        assert [n.notification_id for n in listed] == [second.notification_id, first.notification_id]


class TestNotificationRoutes:
    """API and form routes."""

    def test_api_mark_read_and_delete(self, client, db):
        me = signup_and_login(client, "nina@campus.test", "Nina")
        n = notification_service.create_notification(db, me.id, "Welcome")

        resp = client.post(f"/api/notifications/{n.notification_id}/read")
        assert resp.status_code == 200
        assert resp.json()["is_read"] is True

        assert client.get("/api/notifications/").json()[0]["is_read"] is True

        assert client.delete(f"/api/notifications/{n.notification_id}").status_code == 200
        resp = client.delete(f"/api/notifications/{n.notification_id}")
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "NotFound"

    def test_api_malformed_id_is_not_found(self, client):
        signup_and_login(client, "omar@campus.test", "Omar")
        assert client.post("/api/notifications/not-a-number/read").status_code == 404

    @pytest.mark.parametrize("raw", ["+1", "01_", "1_0", "%D9%A1", "1.0"])
    def test_api_id_must_be_plain_digits(self, client, db, raw):
        me = signup_and_login(client, "olga@campus.test", "Olga")
        n = notification_service.create_notification(db, me.id, "Only row")
        assert n.notification_id == 1

        assert client.post(f"/api/notifications/{raw}/read").status_code == 404
        assert client.post("/api/notifications/1/read").status_code == 200

    def test_api_foreign_notification_is_403(self, client, db):
        owner = signup_and_login(client, "pia@campus.test", "Pia")
        n = notification_service.create_notification(db, owner.id, "Private")
        signup_and_login(client, "quinn@campus.test", "Quinn")

        resp = client.post(f"/api/notifications/{n.notification_id}/read")
        assert resp.status_code == 403
        assert resp.json()["detail"]["error"] == "Unauthorized"
        assert client.delete(f"/api/notifications/{n.notification_id}").status_code == 403

    def test_form_routes_redirect_to_dashboard(self, client, db):
        me = signup_and_login(client, "rita@campus.test", "Rita")
        n = notification_service.create_notification(db, me.id, "Hi")

        resp = client.post(f"/notifications/mark-as-read/{n.notification_id}", follow_redirects=False)
        assert resp.status_code == 303
        assert resp.headers["location"] == "/dashboard"

        dashboard = client.get("/dashboard").json()
        assert dashboard["notifications"][0]["is_read"] is True

        for _ in range(2):
            # The second delete finds nothing and is treated as already gone.
            resp = client.post(f"/notifications/delete/{n.notification_id}", follow_redirects=False)
            assert resp.status_code == 303
            assert resp.headers["location"] == "/dashboard"
        assert client.get("/dashboard").json()["notifications"] == []
