from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from appointment_api.core.database import get_db
from appointment_api.main import app
from tests.conftest import future_date, past_date

def create_appointment(client, user, **overrides):
    payload = {
        "title": "Dentist",
        "date": future_date(),
        "appointmentFor": "Jane Doe",
        **overrides
    }
    response = client.post("/api/v1/appointments", json=payload, headers=user["headers"])
    assert response.status_code == 201
    return response.json()

class TestCreateAppointment:

    def test_create_appointment(self, client, auth_user):
        data = create_appointment(client, auth_user, title="Annual checkup")

        assert data["id"]
        assert data["title"] == "Annual checkup"
        assert data["appointmentFor"] == "Jane Doe"
        assert data["appointmentBy"] == auth_user["id"]

    def test_create_keeps_instant_of_offset_date(self, client, auth_user):
        sent = (datetime.now(timezone(timedelta(hours=2))) + timedelta(days=3)).replace(microsecond=0)

        data = create_appointment(client, auth_user, date=sent.isoformat())

        returned = datetime.fromisoformat(data["date"])
        assert returned.utcoffset() == timedelta(0)
        assert returned == sent

    def test_create_ignores_client_supplied_owner(self, client, auth_user, other_user):
        data = create_appointment(client, auth_user, appointmentBy=other_user["id"])

        assert data["appointmentBy"] == auth_user["id"]

    def test_create_past_date_rejected(self, client, auth_user):
        response = client.post(
            "/api/v1/appointments",
            json={"title": "Dentist", "date": past_date(), "appointmentFor": "Jane Doe"},
            headers=auth_user["headers"]
        )
        assert response.status_code == 422

    def test_create_requires_authentication(self, client):
        response = client.post(
            "/api/v1/appointments",
            json={"title": "Dentist", "date": future_date(), "appointmentFor": "Jane Doe"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized", "message": "Not authenticated"}

    def test_create_with_invalid_token(self, client):
        response = client.post(
            "/api/v1/appointments",
            json={"title": "Dentist", "date": future_date(), "appointmentFor": "Jane Doe"},
            headers={"Authorization": "Bearer invalid_token"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized", "message": "Invalid or expired token"}

class TestListAppointments:

    def test_list_only_own_appointments(self, client, auth_user, other_user):
        mine = create_appointment(client, auth_user, title="Mine")
        create_appointment(client, other_user, title="Theirs")

        response = client.get("/api/v1/appointments", headers=auth_user["headers"])
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [mine["id"]]

    def test_list_empty(self, client, auth_user):
        response = client.get("/api/v1/appointments", headers=auth_user["headers"])
        assert response.status_code == 200
        assert response.json() == []

    def test_list_sorted_and_paged(self, client, auth_user):
        for days, title in ((3, "Third"), (1, "First"), (2, "Second")):
            create_appointment(client, auth_user, title=title, date=future_date(days))

        response = client.get(
            "/api/v1/appointments",
            params={"sortBy": "date", "sortDir": "desc"},
            headers=auth_user["headers"]
        )
        assert [item["title"] for item in response.json()] == ["Third", "Second", "First"]

        response = client.get(
            "/api/v1/appointments",
            params={"sortBy": "date", "sortDir": "asc", "limit": 2, "page": 2},
            headers=auth_user["headers"]
        )
        assert [item["title"] for item in response.json()] == ["Third"]

    def test_list_sort_by_title(self, client, auth_user):
        for title in ("Bravo", "Charlie", "Alpha"):
            create_appointment(client, auth_user, title=title)

        response = client.get(
            "/api/v1/appointments",
            params={"sortBy": "title"},
            headers=auth_user["headers"]
        )
        assert [item["title"] for item in response.json()] == ["Alpha", "Bravo", "Charlie"]

    @pytest.mark.parametrize("params", [
        {"sortBy": "password"},
        {"sortDir": "sideways"},
        {"limit": 0},
        {"page": 0},
    ])
    def test_list_invalid_query(self, client, auth_user, params):
        response = client.get("/api/v1/appointments", params=params, headers=auth_user["headers"])
        assert response.status_code == 422

    def test_list_appointments_for_me(self, client, auth_user, other_user):
        booked = create_appointment(client, other_user, appointmentFor=auth_user["id"])
        create_appointment(client, other_user, appointmentFor="someone else")

        response = client.get("/api/v1/appointments/for-me", headers=auth_user["headers"])
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [booked["id"]]

class TestGetAppointment:

    def test_get_own_appointment(self, client, auth_user):
        created = create_appointment(client, auth_user)

        response = client.get(f"/api/v1/appointments/{created['id']}", headers=auth_user["headers"])
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_missing_appointment(self, client, auth_user):
        response = client.get("/api/v1/appointments/does-not-exist", headers=auth_user["headers"])
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    def test_get_other_users_appointment_is_not_found(self, client, auth_user, other_user):
        theirs = create_appointment(client, other_user)

        response = client.get(f"/api/v1/appointments/{theirs['id']}", headers=auth_user["headers"])
        assert response.status_code == 404
        assert response.json()["message"] == f"Appointment with Id {theirs['id']} not found"

class TestUpdateAppointment:

    def test_update_own_appointment(self, client, auth_user):
        created = create_appointment(client, auth_user)
        new_date = future_date(14)

        response = client.put(
            f"/api/v1/appointments/{created['id']}",
            json={"title": "Rescheduled", "date": new_date},
            headers=auth_user["headers"]
        )
        assert response.status_code == 200

        data = response.json()
        assert data["title"] == "Rescheduled"
        assert data["appointmentFor"] == created["appointmentFor"]
        assert data["appointmentBy"] == auth_user["id"]
        assert data["date"] != created["date"]

    def test_update_past_date_rejected(self, client, auth_user):
        created = create_appointment(client, auth_user)

        response = client.put(
            f"/api/v1/appointments/{created['id']}",
            json={"title": "Too late", "date": past_date()},
            headers=auth_user["headers"]
        )
        assert response.status_code == 422
        assert response.json()["message"] == "Appointment date must be in the future"

    @pytest.mark.parametrize("field", ["title", "appointmentFor"])
    def test_update_blank_text_rejected(self, client, auth_user, field):
        created = create_appointment(client, auth_user)

        response = client.put(
            f"/api/v1/appointments/{created['id']}",
            json={field: "   ", "date": future_date()},
            headers=auth_user["headers"]
        )
        assert response.status_code == 422

    def test_update_missing_appointment(self, client, auth_user):
        response = client.put(
            "/api/v1/appointments/does-not-exist",
            json={"date": future_date()},
            headers=auth_user["headers"]
        )
        assert response.status_code == 404

    def test_update_other_users_appointment_is_not_found(self, client, auth_user, other_user):
        theirs = create_appointment(client, other_user, title="Theirs")

        response = client.put(
            f"/api/v1/appointments/{theirs['id']}",
            json={"title": "Hijacked", "date": future_date()},
            headers=auth_user["headers"]
        )
        assert response.status_code == 404

        response = client.get(f"/api/v1/appointments/{theirs['id']}", headers=other_user["headers"])
        assert response.json()["title"] == "Theirs"

class TestDeleteAppointment:

    def test_delete_own_appointment(self, client, auth_user):
        created = create_appointment(client, auth_user)

        response = client.delete(f"/api/v1/appointments/{created['id']}", headers=auth_user["headers"])
        assert response.status_code == 200
        assert response.json() == {
            "message": f"Appointment with Id {created['id']} deleted successfully"
        }

        response = client.get(f"/api/v1/appointments/{created['id']}", headers=auth_user["headers"])
        assert response.status_code == 404

    def test_delete_missing_appointment(self, client, auth_user):
        response = client.delete("/api/v1/appointments/does-not-exist", headers=auth_user["headers"])
        assert response.status_code == 400
        assert response.json()["message"] == (
            "There is no appointments available with Id does-not-exist. "
            "Please check the appointment Id."
        )

    def test_delete_other_users_appointment(self, client, auth_user, other_user):
        theirs = create_appointment(client, other_user)

        response = client.delete(f"/api/v1/appointments/{theirs['id']}", headers=auth_user["headers"])
        assert response.status_code == 400
        assert response.json()["message"] == f"Error while deleting the appointment for ID {theirs['id']}"

        response = client.get(f"/api/v1/appointments/{theirs['id']}", headers=other_user["headers"])
        assert response.status_code == 200

class TestServiceEndpoints:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "ok"
        assert "X-Process-Time" in response.headers

    def test_health_reports_unreachable_database(self, client):
        broken = MagicMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        app.dependency_overrides[get_db] = lambda: broken
        try:
            response = client.get("/health")
        finally:
            app.dependency_overrides.pop(get_db, None)

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unavailable"

    def test_unknown_route(self, client):
        response = client.get("/api/v1/nowhere")
        assert response.status_code == 404
        assert response.json()["path"] == "/api/v1/nowhere"
