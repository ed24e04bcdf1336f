#!/usr/bin/env python3
"""Tests for the Flask JSON API."""

import pytest

from web.app import create_app, to_json
from carlog import ExpenseCategory, RangeEstimate


@pytest.fixture
def app(tmp_path):
    app = create_app(tmp_path / "logbook.json")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def add_fuel(client, odometer, total, **extra):
    body = {"odometer": odometer, "pricePerLiter": 20, "totalCost": total, "gasStation": "Shell"}
    body.update(extra)
    return client.post("/api/fuel", json=body)


class TestToJson:
    def test_converts_nested_values(self):
        value = {ExpenseCategory.TIRES: [RangeEstimate(has_data=False, message="x")]}
        assert to_json(value) == {
            "Llantas": [
                {"has_data": False, "avg": 0.0, "pessimistic": 0.0, "optimistic": 0.0, "message": "x"}
            ]
        }


class TestStatistics:
    """Tests for the derived statistics endpoints."""

    def test_summary_empty(self, client):
        response = client.get("/api/summary")
        assert response.status_code == 200
        data = response.get_json()
        assert data["total_spending"] == 0
        assert data["pending_tasks"] == 0
        assert data["estimated_range"]["has_data"] is False

    def test_analysis_empty(self, client):
        data = client.get("/api/analysis").get_json()
        assert data["tank"] is None
        assert data["has_efficiency_data"] is False
        assert [t["trip_type"] for t in data["trip_types"]] == ["Trabajo", "Carretera", "Otro"]

    def test_stations_and_range(self, client):
        add_fuel(client, 0, 600, date="2025-01-01")
        add_fuel(client, 300, 400, date="2025-01-10", endTankPercentage=50)
        stations = client.get("/api/stations").get_json()
        assert stations[0]["station"] == "Shell"
        assert stations[0]["avg_kmpl"] == pytest.approx(15.0)

        estimate = client.get("/api/range").get_json()
        assert estimate["has_data"] is False
        assert estimate["message"] == "Define the tank capacity in the vehicle profile."

    def test_summary_spending_by_category(self, client):
        client.post("/api/expenses", json={"category": "Seguro", "description": "Policy", "cost": 500})
        data = client.get("/api/summary").get_json()
        assert data["spending_by_category"] == {"Seguro": 500}
        assert data["total_spending"] == 500


class TestVehicle:
    """Tests for the vehicle profile endpoints."""

    def test_no_vehicle(self, client):
        response = client.get("/api/vehicle")
        assert response.status_code == 200
        assert response.get_json() is None

    def test_set_vehicle(self, client):
        body = {"make": "Mazda", "model": "3", "year": 2019, "mileage": 42000, "tankCapacity": 50}
        response = client.put("/api/vehicle", json=body)
        assert response.status_code == 200
        vehicle = client.get("/api/vehicle").get_json()
        assert vehicle["tank_capacity"] == 50
        assert vehicle["mileage"] == 42000

    def test_tank_capacity_unlocks_range(self, client):
        client.put("/api/vehicle", json={"make": "Mazda", "model": "3", "year": 2019, "tankCapacity": 50})
        add_fuel(client, 0, 600, date="2025-01-01")
        add_fuel(client, 600, 1000, date="2025-01-20", endTankPercentage=40)
        estimate = client.get("/api/range").get_json()
        assert estimate["has_data"] is True
        assert estimate["avg"] == pytest.approx(240.0)

    def test_missing_field(self, client):
        response = client.put("/api/vehicle", json={"make": "Mazda", "model": "3"})
        assert response.status_code == 400
        assert response.get_json()["error"].startswith("Missing field: year")

    def test_invalid_year(self, client):
        response = client.put("/api/vehicle", json={"make": "Mazda", "model": "3", "year": "new"})
        assert response.status_code == 400

    def test_clear_vehicle(self, client):
        client.put("/api/vehicle", json={"make": "Mazda", "model": "3", "year": 2019})
        assert client.delete("/api/vehicle").status_code == 204
        assert client.get("/api/vehicle").get_json() is None


class TestRecords:
    """Tests for adding, toggling and deleting records."""

    def test_add_fuel(self, client):
        response = add_fuel(client, 1000, 400)
        assert response.status_code == 201
        entry = response.get_json()
        assert entry["liters"] == 20
        assert entry["gas_station"] == "Shell"
        exported = client.get("/api/export").get_json()
        assert [e["id"] for e in exported["fuelEntries"]] == [entry["id"]]

    def test_add_report(self, client):
        response = client.post(
            "/api/reports",
            json={
                "date": "2025-01-15T08:00",
                "odometer": 1000,
                "remainingKm": 400,
                "fuelGaugeLevel": 9,
                "tripType": "highway",
            },
        )
        assert response.status_code == 201
        assert response.get_json()["trip_type"] == "Carretera"

    def test_missing_field(self, client):
        response = client.post("/api/reports", json={"date": "2025-01-15T08:00"})
        assert response.status_code == 400
        assert response.get_json()["error"].startswith("Missing field: odometer")

    def test_internal_key_error_is_not_a_client_error(self, app, client):
        def broken():
            return {}["nothing"]

        app.add_url_rule("/api/broken", view_func=broken)
        with pytest.raises(KeyError):
            client.get("/api/broken")

    def test_invalid_value(self, client):
        response = client.post(
            "/api/reports",
            json={"date": "2025-01-15T08:00", "odometer": 1, "remainingKm": 1, "fuelGaugeLevel": 0},
        )
        assert response.status_code == 400
        assert "fuel_gauge_level" in response.get_json()["error"]

    def test_body_must_be_json_object(self, client):
        response = client.post("/api/fuel", data="nope", content_type="text/plain")
        assert response.status_code == 400

    def test_toggle_task(self, client):
        task = client.post(
            "/api/tasks", json={"description": "Oil change", "cost": 900, "odometer": 41500}
        ).get_json()
        response = client.post(f"/api/tasks/{task['id']}/toggle")
        assert response.status_code == 200
        assert response.get_json()["is_completed"] is True
        assert client.get("/api/summary").get_json()["pending_tasks"] == 0

    def test_delete(self, client):
        entry = add_fuel(client, 1000, 400).get_json()
        assert client.delete(f"/api/fuel/{entry['id']}").status_code == 204
        assert client.get("/api/export").get_json()["fuelEntries"] == []

    def test_delete_unknown_id(self, client):
        response = client.delete("/api/expenses/missing")
        assert response.status_code == 404
        assert response.get_json()["error"] == "No expense with id 'missing'"

    def test_delete_unknown_kind(self, client):
        assert client.delete("/api/widgets/1").status_code == 404


class TestImport:
    """Tests for the import endpoint."""

    def test_import_replaces_logbook(self, client):
        add_fuel(client, 1000, 400)
        document = {
            "vehicle": {"make": "Honda", "model": "Fit", "year": 2015, "mileage": 90000},
            "fuelEntries": [],
            "expenses": [],
            "maintenanceTasks": [],
            "tripReports": [],
        }
        response = client.post("/api/import", json=document)
        assert response.status_code == 200
        assert response.get_json()["fuelEntries"] == 0
        assert client.get("/api/export").get_json() == document

    def test_rejected_import_keeps_logbook(self, client):
        add_fuel(client, 1000, 400)
        before = client.get("/api/export").get_json()
        document = dict(before, tripReports={"not": "an array"})
        response = client.post("/api/import", json=document)
        assert response.status_code == 400
        assert "'tripReports' must be an array" in response.get_json()["error"]
        assert client.get("/api/export").get_json() == before
