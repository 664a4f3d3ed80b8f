"""
Tests for the HTTP surface: routing, caller identity and error mapping
"""
import pytest
from fastapi.testclient import TestClient

from internhub.domain.enums import ApplicationStatus
from internhub.presentation.api.v1.container import (
    get_application_service,
    get_internship_service,
    get_registry,
    get_reporting_service,
)
from internhub.presentation.main import app

from conftest import ACME, ALICE, BEN, CHLOE, GLOBEX, STAFF


def as_user(user_id: str) -> dict:
    return {"X-User-Id": user_id}


NEW_POSTING = {
    "title": "Mobile Intern",
    "description": "Flutter and Kotlin",
    "level": "basic",
    "preferred_major": "Computer Science",
    "open_date": "2025-05-20",
    "close_date": "2025-08-20",
    "num_slots": 2,
}


@pytest.fixture
def client(application_service, internship_service, reporting_service, registry):
    """Client wired to the test services; the start-up lifespan is not run"""
    app.dependency_overrides[get_application_service] = lambda: application_service
    app.dependency_overrides[get_internship_service] = lambda: internship_service
    app.dependency_overrides[get_reporting_service] = lambda: reporting_service
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestInternshipEndpoints:

    def test_create_approve_and_list(self, client):
        """Test a posting becomes visible to students once staff approve it"""
        response = client.post("/api/v1/internships", json=NEW_POSTING, headers=as_user(ACME))
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Pending"
        assert body["level"] == "Basic"
        assert body["visible"] is False

        assert client.get("/api/v1/internships/visible", headers=as_user(BEN)).json() == []

        response = client.post(f"/api/v1/internships/{body['id']}/approve", headers=as_user(STAFF))
        assert response.status_code == 200
        assert response.json()["status"] == "Approved"

        visible = client.get("/api/v1/internships/visible", headers=as_user(BEN)).json()
        assert [i["id"] for i in visible] == [body["id"]]
        assert visible[0]["availability"] == "Available"

    def test_missing_caller(self, client):
        response = client.get("/api/v1/internships/visible")
        assert response.status_code == 401

    def test_unknown_caller(self, client):
        response = client.get("/api/v1/internships/visible", headers=as_user("nobody"))
        assert response.status_code == 404
        assert response.json()["error"] == "ResourceNotFoundException"

    def test_schema_validation(self, client):
        response = client.post(
            "/api/v1/internships",
            json={**NEW_POSTING, "close_date": "2025-05-01"},
            headers=as_user(ACME),
        )
        assert response.status_code == 422

    def test_service_validation(self, client):
        response = client.post(
            "/api/v1/internships",
            json={**NEW_POSTING, "num_slots": 12},
            headers=as_user(ACME),
        )
        assert response.status_code == 422
        assert "num_slots" in response.json()["detail"]

    def test_wrong_role(self, client):
        response = client.post("/api/v1/internships", json=NEW_POSTING, headers=as_user(ALICE))
        assert response.status_code == 403

    def test_edit_lock_is_conflict(self, client, add_internship):
        internship = add_internship(creator_id=ACME)

        response = client.patch(
            f"/api/v1/internships/{internship.id}",
            json={"title": "Renamed"},
            headers=as_user(ACME),
        )
        assert response.status_code == 409
        assert response.json()["error"] == "InvalidTransitionException"

    def test_edit_and_delete_pending(self, client):
        created = client.post("/api/v1/internships", json=NEW_POSTING, headers=as_user(ACME)).json()

        response = client.patch(
            f"/api/v1/internships/{created['id']}",
            json={"num_slots": 4},
            headers=as_user(ACME),
        )
        assert response.status_code == 200
        assert response.json()["num_slots"] == 4
        assert response.json()["title"] == NEW_POSTING["title"]

        response = client.delete(f"/api/v1/internships/{created['id']}", headers=as_user(ACME))
        assert response.status_code == 204
        assert client.get(f"/api/v1/internships/{created['id']}", headers=as_user(STAFF)).status_code == 404

    def test_toggle_visibility(self, client, add_internship):
        internship = add_internship(creator_id=ACME)

        response = client.post(f"/api/v1/internships/{internship.id}/visibility", headers=as_user(ACME))
        assert response.json() == {"internship_id": internship.id, "visible": False}

        response = client.post(f"/api/v1/internships/{internship.id}/visibility", headers=as_user(GLOBEX))
        assert response.status_code == 403


class TestApplicationEndpoints:

    def test_apply_and_accept(self, client, add_internship, registry):
        """Test the full path from application to accepted placement"""
        internship = add_internship(num_slots=1)

        response = client.post(
            "/api/v1/applications", json={"internship_id": internship.id}, headers=as_user(ALICE)
        )
        assert response.status_code == 201
        application_id = response.json()["id"]
        assert response.json()["internship_title"] == internship.title

        response = client.post(f"/api/v1/applications/{application_id}/confirm", headers=as_user(ACME))
        assert response.json()["status"] == "Successful"

        response = client.post(f"/api/v1/applications/{application_id}/accept", headers=as_user(ALICE))
        assert response.status_code == 200
        assert response.json()["status"] == "Accepted"

        detail = client.get(f"/api/v1/internships/{internship.id}", headers=as_user(ALICE)).json()
        assert detail["status"] == "Filled"
        assert detail["filled_slots"] == 1

    def test_duplicate_is_conflict(self, client, add_internship):
        internship = add_internship()
        client.post("/api/v1/applications", json={"internship_id": internship.id}, headers=as_user(ALICE))

        response = client.post(
            "/api/v1/applications", json={"internship_id": internship.id}, headers=as_user(ALICE)
        )
        assert response.status_code == 409
        assert response.json()["error"] == "DuplicateResourceException"

    def test_withdrawal_flow(self, client, add_internship, add_application):
        application = add_application(add_internship(), ALICE, ApplicationStatus.ACCEPTED)

        response = client.post(
            f"/api/v1/applications/{application.id}/withdrawal",
            json={"reason": "Accepted a scholarship"},
            headers=as_user(ALICE),
        )
        assert response.json()["status"] == "WithdrawalRequested"
        assert response.json()["previous_status"] == "Accepted"

        requests = client.get("/api/v1/applications/withdrawals", headers=as_user(STAFF)).json()
        assert [r["withdrawal_reason"] for r in requests] == ["Accepted a scholarship"]

        response = client.post(
            f"/api/v1/applications/{application.id}/withdrawal/approve", headers=as_user(STAFF)
        )
        assert response.json()["status"] == "Withdrawn"

    def test_withdrawal_without_body(self, client, add_internship, add_application):
        application = add_application(add_internship(), ALICE)

        response = client.post(f"/api/v1/applications/{application.id}/withdrawal", headers=as_user(ALICE))
        assert response.status_code == 200
        assert response.json()["withdrawal_reason"] is None

    def test_my_applications(self, client, add_internship, add_application):
        add_application(add_internship(title="A"), ALICE)
        add_application(add_internship(title="B"), CHLOE)

        response = client.get("/api/v1/applications/mine", headers=as_user(ALICE))
        assert [a["internship_title"] for a in response.json()] == ["A"]

    def test_unknown_application(self, client):
        response = client.post("/api/v1/applications/999/approve", headers=as_user(ACME))
        assert response.status_code == 404


class TestReportEndpoint:

    def test_placement_report(self, client, add_internship, add_application):
        internship = add_internship(num_slots=2)
        add_internship(title="Other", num_slots=3)
        add_application(internship, ALICE, ApplicationStatus.ACCEPTED)
        add_application(internship, CHLOE)

        response = client.get("/api/v1/reports/placements", headers=as_user(STAFF))

        assert response.status_code == 200
        report = response.json()
        assert report["total_internships"] == 2
        assert report["total_slots"] == 5
        assert report["filled_slots"] == 1
        assert report["fill_rate"] == pytest.approx(0.2)
        assert report["applications_by_status"] == {"Accepted": 1, "Pending": 1}

    def test_report_requires_staff(self, client):
        response = client.get("/api/v1/reports/placements", headers=as_user(ALICE))
        assert response.status_code == 403
