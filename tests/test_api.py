"""
HTTP-level tests: authentication gate, status codes and error bodies.
"""
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.jwt_auth import create_access_token
from app.db.session import get_db
from app.main import app
from app.repositories import StableRepository
from app.services import get_campaign_service, get_stable_service
from app.services.stable_service import StableService
from tests.factories import campaign_payload


def _create_stable(client, headers, name="North barn", **extra):
    body = {"name": name, "capacity": 25}
    body.update(extra)
    response = client.post("/api/stables/", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _create_campaign(client, headers, stable_id, name="Spring drive", **extra):
    response = client.post("/api/campaigns/", json=campaign_payload(stable_id, name, **extra), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthenticationGate:

    def test_missing_token_is_401(self, client):
        response = client.get("/api/campaigns/")

        assert response.status_code == 401
        assert response.json() == {"detail": "Authentication required"}

    def test_invalid_token_is_401(self, client):
        response = client.get("/api/stables/", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_token_without_roles_is_403(self, client):
        token = create_access_token("alice", [])

        response = client.get("/api/stables/", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_me_reports_identity(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers("root", "ROLE_USER", "ROLE_ADMIN"))

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "root"
        assert body["is_admin"] is True
        assert sorted(body["roles"]) == ["ROLE_ADMIN", "ROLE_USER"]

    def test_health_is_public(self, client):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json()["database_ok"] is True


class TestStableEndpoints:

    def test_create_applies_defaults(self, client, auth_headers):
        body = _create_stable(client, auth_headers("alice"))

        assert body["owner_username"] == "alice"
        assert body["location"] == "Peru"
        assert body["status"] == "OPERATIVE"

    def test_duplicate_name_is_409(self, client, auth_headers):
        headers = auth_headers("alice")
        _create_stable(client, headers, "Barn")

        response = client.post("/api/stables/", json={"name": "Barn", "capacity": 3}, headers=headers)

        assert response.status_code == 409
        assert "already exists" in response.json()["error"]

    def test_zero_capacity_is_a_field_error(self, client, auth_headers):
        response = client.post("/api/stables/", json={"name": "Barn", "capacity": 0}, headers=auth_headers("alice"))

        assert response.status_code == 400
        assert "capacity" in response.json()

    def test_list_is_owner_scoped(self, client, auth_headers):
        _create_stable(client, auth_headers("alice"), "A")
        _create_stable(client, auth_headers("bob"), "B")

        alice_view = client.get("/api/stables/", headers=auth_headers("alice")).json()
        admin_view = client.get("/api/stables/", headers=auth_headers("root", "ROLE_ADMIN")).json()

        assert [s["name"] for s in alice_view] == ["A"]
        assert len(admin_view) == 2

    def test_foreign_stable_is_403(self, client, auth_headers):
        stable = _create_stable(client, auth_headers("alice"))

        response = client.get(f"/api/stables/{stable['id']}", headers=auth_headers("bob"))

        assert response.status_code == 403
        assert response.json()["error"] == f"Access denied to stable with id: {stable['id']}"

    def test_missing_stable_is_404(self, client, auth_headers):
        response = client.get("/api/stables/999", headers=auth_headers("alice"))

        assert response.status_code == 404
        assert response.json() == {"error": "Stable not found with id: 999"}

    def test_stable_campaigns(self, client, auth_headers):
        headers = auth_headers("alice")
        stable = _create_stable(client, headers)
        _create_campaign(client, headers, stable["id"], "One")
        _create_campaign(client, headers, stable["id"], "Two")

        response = client.get(f"/api/stables/{stable['id']}/campaigns", headers=headers)

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["One", "Two"]

    def test_stable_campaigns_of_foreign_stable_is_403(self, client, auth_headers):
        stable = _create_stable(client, auth_headers("alice"))

        response = client.get(f"/api/stables/{stable['id']}/campaigns", headers=auth_headers("bob"))

        assert response.status_code == 403


class TestCampaignEndpoints:

    def test_create_and_read(self, client, auth_headers):
        headers = auth_headers("alice")
        stable = _create_stable(client, headers)

        created = _create_campaign(client, headers, stable["id"])
        fetched = client.get(f"/api/campaigns/{created['id']}", headers=headers)

        assert fetched.status_code == 200
        body = fetched.json()
        assert body["stable_id"] == stable["id"]
        assert body["status"] == "PLANNED"
        assert body["goals"] == [] and body["channels"] == []

    def test_invalid_status_is_400(self, client, auth_headers):
        headers = auth_headers("alice")
        stable = _create_stable(client, headers)

        response = client.post("/api/campaigns/", json=campaign_payload(stable["id"], status="DRAFT"), headers=headers)

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid status")

    def test_campaign_on_foreign_stable_is_403(self, client, auth_headers):
        stable = _create_stable(client, auth_headers("bob"))

        response = client.post("/api/campaigns/", json=campaign_payload(stable["id"]), headers=auth_headers("alice"))

        assert response.status_code == 403

    def test_campaign_on_missing_stable_is_404(self, client, auth_headers):
        response = client.post("/api/campaigns/", json=campaign_payload(321), headers=auth_headers("alice"))
        assert response.status_code == 404

    def test_duplicate_campaign_name_is_409(self, client, auth_headers):
        headers = auth_headers("alice")
        stable = _create_stable(client, headers)
        _create_campaign(client, headers, stable["id"], "Launch")

        response = client.post("/api/campaigns/", json=campaign_payload(stable["id"], "Launch"), headers=headers)

        assert response.status_code == 409

    def test_update_status(self, client, auth_headers):
        headers = auth_headers("alice")
        campaign = _create_campaign(client, headers, _create_stable(client, headers)["id"])

        response = client.patch(
            f"/api/campaigns/{campaign['id']}/update-status", json={"status": "ACTIVE"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "ACTIVE"

    def test_unknown_status_update_is_400(self, client, auth_headers):
        headers = auth_headers("alice")
        campaign = _create_campaign(client, headers, _create_stable(client, headers)["id"])

        response = client.patch(
            f"/api/campaigns/{campaign['id']}/update-status", json={"status": "CANCELLED"}, headers=headers
        )

        assert response.status_code == 400
        assert client.get(f"/api/campaigns/{campaign['id']}", headers=headers).json()["status"] == "PLANNED"

    def test_goals_and_channels(self, client, auth_headers):
        headers = auth_headers("alice")
        campaign = _create_campaign(client, headers, _create_stable(client, headers)["id"])
        base = f"/api/campaigns/{campaign['id']}"

        goal = client.patch(
            f"{base}/add-goal",
            json={"description": "Reach farmers", "metric": "VIEWS", "target_value": 1000},
            headers=headers
        )
        duplicate = client.patch(
            f"{base}/add-goal",
            json={"description": "REACH FARMERS", "metric": "CLICKS", "target_value": 10},
            headers=headers
        )
        channel = client.patch(f"{base}/add-channel", json={"type": "SMS", "details": "weekly"}, headers=headers)

        assert goal.status_code == 200
        assert duplicate.status_code == 409
        assert channel.status_code == 200
        assert len(channel.json()["goals"]) == 1

        goals = client.get(f"{base}/goals", headers=headers).json()
        channels = client.get(f"{base}/channels", headers=headers).json()
        assert [(g["description"], g["metric"], g["current_value"]) for g in goals] == [("Reach farmers", "VIEWS", 0)]
        assert [c["type"] for c in channels] == ["SMS"]

    def test_invalid_metric_is_400(self, client, auth_headers):
        headers = auth_headers("alice")
        campaign = _create_campaign(client, headers, _create_stable(client, headers)["id"])

        response = client.patch(
            f"/api/campaigns/{campaign['id']}/add-goal",
            json={"description": "Likes", "metric": "LIKES", "target_value": 5},
            headers=headers
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid metric")

    def test_delete_then_404(self, client, auth_headers):
        headers = auth_headers("alice")
        campaign = _create_campaign(client, headers, _create_stable(client, headers)["id"])
        client.patch(f"/api/campaigns/{campaign['id']}/add-channel", json={"type": "EMAIL"}, headers=headers)

        deleted = client.delete(f"/api/campaigns/{campaign['id']}", headers=headers)
        again = client.get(f"/api/campaigns/{campaign['id']}", headers=headers)

        assert deleted.status_code == 204
        assert again.status_code == 404

    def test_admin_deletes_any_campaign(self, client, auth_headers):
        headers = auth_headers("alice")
        campaign = _create_campaign(client, headers, _create_stable(client, headers)["id"])

        response = client.delete(f"/api/campaigns/{campaign['id']}", headers=auth_headers("root", "ROLE_ADMIN"))

        assert response.status_code == 204

    def test_other_user_cannot_delete(self, client, auth_headers):
        headers = auth_headers("alice")
        campaign = _create_campaign(client, headers, _create_stable(client, headers)["id"])

        response = client.delete(f"/api/campaigns/{campaign['id']}", headers=auth_headers("bob"))

        assert response.status_code == 403


class _UncheckedStableRepository(StableRepository):
    """Skips the name lookup so the unique constraint is hit in the database"""

    def find_by_name_and_owner(self, name, owner_username):
        return None


class _BrokenCampaignService:
    def list_visible(self, username, is_admin):
        raise RuntimeError("campaign store unavailable")


@pytest.fixture
def overrides():
    yield app.dependency_overrides
    app.dependency_overrides.clear()


class TestErrorMapping:
    """Failures outside the service checks still map onto status codes"""

    def test_integrity_violation_is_409(self, client, auth_headers, overrides):
        # Given: a stable service without the duplicate pre-check
        def unchecked_stable_service(db: Session = Depends(get_db)):
            return StableService(_UncheckedStableRepository(db))
        overrides[get_stable_service] = unchecked_stable_service
        headers = auth_headers("alice")
        _create_stable(client, headers, "Barn")

        # When: the same name is written again
        response = client.post("/api/stables/", json={"name": "Barn", "capacity": 3}, headers=headers)

        # Then: the database rejection surfaces as a storage failure
        assert response.status_code == 409
        assert response.json()["error"].startswith("Data integrity violation")
        assert len(client.get("/api/stables/", headers=headers).json()) == 1

    def test_unexpected_error_is_500(self, schema, auth_headers, overrides):
        overrides[get_campaign_service] = lambda: _BrokenCampaignService()

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/campaigns/", headers=auth_headers("alice"))

        assert response.status_code == 500
        assert response.json() == {"error": "campaign store unavailable"}
