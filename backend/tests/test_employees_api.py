"""
Employee API: /api/employees Integration Tests
================================================

Runs the real app against a per-test SQLite database through httpx.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from employee_api.exceptions import DatabaseError
from employee_api.services.employee_service import employee_service


async def _create(client, payload):
    response = await client.post("/api/employees", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateEmployee:

    @pytest.mark.asyncio
    async def test_create_returns_envelope(self, test_client, ann_payload):
        response = await test_client.post("/api/employees", json=ann_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Employee created successfully"
        assert body["data"]["salary"] == 1000
        assert body["data"]["_id"]
        assert {"dateOfJoining", "createdAt", "updatedAt"} <= set(body["data"])

    @pytest.mark.asyncio
    async def test_text_fields_are_trimmed(self, test_client):
        data = await _create(
            test_client,
            {"name": "  Ann ", "position": " Eng", "location": "NY  ", "salary": "1000"},
        )
        assert (data["name"], data["position"], data["location"]) == ("Ann", "Eng", "NY")

        fetched = await test_client.get(f"/api/employees/{data['_id']}")
        assert fetched.json()["data"]["name"] == "Ann"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "position", "location", "salary"])
    async def test_missing_field_persists_nothing(self, test_client, ann_payload, field):
        del ann_payload[field]

        response = await test_client.post("/api/employees", json=ann_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == (
            "Please provide all required fields: name, position, location, salary"
        )
        listing = await test_client.get("/api/employees")
        assert listing.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_negative_salary_rejected(self, test_client, ann_payload):
        ann_payload["salary"] = -5

        response = await test_client.post("/api/employees", json=ann_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Salary must be a valid positive number"

    @pytest.mark.asyncio
    async def test_huge_integer_salary_rejected(self, test_client, ann_payload):
        ann_payload["salary"] = int("9" * 400)

        response = await test_client.post("/api/employees", json=ann_payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Salary must be a valid positive number"

    @pytest.mark.asyncio
    async def test_long_text_fields_accepted(self, test_client, ann_payload):
        ann_payload["name"] = "A" * 300
        ann_payload["location"] = "New York " * 50

        data = await _create(test_client, ann_payload)

        assert data["name"] == "A" * 300
        assert data["location"] == ("New York " * 50).strip()

    @pytest.mark.asyncio
    async def test_date_of_joining_kept(self, test_client, ann_payload):
        ann_payload["dateOfJoining"] = "2023-06-01T00:00:00Z"

        data = await _create(test_client, ann_payload)

        assert data["dateOfJoining"].startswith("2023-06-01")

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self, test_client):
        response = await test_client.post(
            "/api/employees",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_array_body_rejected(self, test_client):
        response = await test_client.post("/api/employees", json=[1, 2])
        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object"


class TestReadEmployees:

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, test_client, ann_payload):
        first = await _create(test_client, ann_payload)
        second = await _create(test_client, {**ann_payload, "name": "Bob"})

        response = await test_client.get("/api/employees")

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["count"] == 2
        assert [e["_id"] for e in body["data"]] == [second["_id"], first["_id"]]

    @pytest.mark.asyncio
    async def test_get_unknown_id_is_404(self, test_client):
        response = await test_client.get(f"/api/employees/{uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Employee not found"}

    @pytest.mark.asyncio
    async def test_get_malformed_id_is_400(self, test_client):
        response = await test_client.get("/api/employees/not-a-valid-id")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid employee ID format"}


class TestUpdateEmployee:

    @pytest.mark.asyncio
    async def test_salary_only_update_keeps_other_fields(self, test_client, ann_payload):
        created = await _create(test_client, ann_payload)

        response = await test_client.put(f"/api/employees/{created['_id']}", json={"salary": 1500})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Employee updated successfully"
        assert body["data"]["name"] == "Ann"
        assert body["data"]["position"] == "Eng"
        assert body["data"]["location"] == "NY"
        assert body["data"]["salary"] == 1500

    @pytest.mark.asyncio
    async def test_update_trims_text(self, test_client, ann_payload):
        created = await _create(test_client, ann_payload)

        response = await test_client.put(
            f"/api/employees/{created['_id']}", json={"location": "  Boston "}
        )

        assert response.json()["data"]["location"] == "Boston"

    @pytest.mark.asyncio
    async def test_update_negative_salary_rejected(self, test_client, ann_payload):
        created = await _create(test_client, ann_payload)

        response = await test_client.put(f"/api/employees/{created['_id']}", json={"salary": -1})

        assert response.status_code == 400
        fetched = await test_client.get(f"/api/employees/{created['_id']}")
        assert fetched.json()["data"]["salary"] == 1000

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_404(self, test_client):
        response = await test_client.put(f"/api/employees/{uuid4()}", json={"salary": 10})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_malformed_id_is_400(self, test_client):
        response = await test_client.put("/api/employees/12345", json={"salary": 10})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid employee ID format"


class TestDeleteEmployee:

    @pytest.mark.asyncio
    async def test_delete_then_get_is_404(self, test_client, ann_payload):
        created = await _create(test_client, ann_payload)

        response = await test_client.delete(f"/api/employees/{created['_id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Employee deleted successfully"
        assert body["data"]["_id"] == created["_id"]

        fetched = await test_client.get(f"/api/employees/{created['_id']}")
        assert fetched.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_404(self, test_client):
        response = await test_client.delete(f"/api/employees/{uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_malformed_id_is_400(self, test_client):
        response = await test_client.delete("/api/employees/xyz")
        assert response.status_code == 400


class TestServerErrors:

    @pytest.mark.asyncio
    async def test_database_error_detail_in_development(self, test_client, monkeypatch):
        monkeypatch.setattr(
            employee_service,
            "list_employees",
            AsyncMock(side_effect=DatabaseError(context={"original_error": "connection reset"})),
        )

        response = await test_client.get("/api/employees")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Server Error",
            "error": "connection reset",
        }

    @pytest.mark.asyncio
    async def test_database_error_detail_hidden_in_production(self, app, test_client, monkeypatch):
        monkeypatch.setattr(app.state.settings, "environment", "production")
        monkeypatch.setattr(
            employee_service,
            "list_employees",
            AsyncMock(side_effect=DatabaseError(context={"original_error": "connection reset"})),
        )

        response = await test_client.get("/api/employees")

        assert response.status_code == 500
        assert response.json()["error"] == "Something went wrong"
