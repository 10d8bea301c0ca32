"""End-to-end tests for the HTTP API."""
from datetime import timedelta

import pytest

from app.domain.exceptions import DuplicatePositionError
from app.infrastructure.persistence.repositories.sqlalchemy_gps_position_repository import (
    SQLAlchemyGpsPositionRepository,
)
from app.utils.time_utils import utc_now

pytestmark = pytest.mark.integration


def _timestamp(minutes_ago=30):
    return (utc_now().replace(microsecond=0) - timedelta(minutes=minutes_ago)).isoformat()


def _position(minutes_ago=30, latitude=37.9838, longitude=23.7275, **kwargs):
    return {"latitude": latitude, "longitude": longitude, "recorded_at": _timestamp(minutes_ago), **kwargs}


class TestSubmitPosition:

    def test_accepts_valid_position(self, client):
        response = client.post("/api/v1/gps/position", json=_position(vehicle_id=1))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Position submitted successfully"
        assert body["data"]["id"] is not None
        assert body["data"]["vehicle_id"] == 1

    def test_unknown_vehicle_is_400(self, client):
        response = client.post("/api/v1/gps/position", json=_position(vehicle_id=999))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "Vehicle with ID 999 does not exist." in body["errors"]

    def test_invalid_coordinates_are_400(self, client):
        response = client.post("/api/v1/gps/position", json=_position(vehicle_id=1, latitude=123.0))

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid coordinates")

    def test_duplicate_is_400_with_message(self, client):
        payload = _position(vehicle_id=1)
        client.post("/api/v1/gps/position", json=payload)

        response = client.post("/api/v1/gps/position", json=payload)

        assert response.status_code == 400
        assert any("already exists" in e for e in response.json()["errors"])

    def test_storage_conflict_is_409(self, client, monkeypatch):
        async def conflicting_save(repository):
            raise DuplicatePositionError(1)

        monkeypatch.setattr(SQLAlchemyGpsPositionRepository, "save_changes", conflicting_save)

        response = client.post("/api/v1/gps/position", json=_position(vehicle_id=1))

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert "already exists" in body["message"]

    def test_missing_field_is_422(self, client):
        response = client.post("/api/v1/gps/position", json={"vehicle_id": 1, "latitude": 37.98})
        assert response.status_code == 422


class TestSubmitBatch:

    def test_accepts_batch(self, client):
        payload = {"vehicle_id": 1, "positions": [_position(minutes_ago=m) for m in (30, 29, 28)]}

        response = client.post("/api/v1/gps/positions/batch", json=payload)

        assert response.status_code == 200
        assert response.json()["message"] == "3 positions submitted successfully"
        assert len(response.json()["data"]) == 3

    def test_empty_batch_is_400(self, client):
        response = client.post("/api/v1/gps/positions/batch", json={"vehicle_id": 1, "positions": []})

        assert response.status_code == 400
        assert response.json()["errors"] == ["Positions collection cannot be null or empty."]

    def test_inactive_vehicle_is_400(self, client):
        payload = {"vehicle_id": 2, "positions": [_position()]}

        response = client.post("/api/v1/gps/positions/batch", json=payload)

        assert response.status_code == 400
        assert "inactive" in response.json()["message"]


class TestQueries:

    @pytest.fixture
    def track(self, client):
        start = utc_now().replace(microsecond=0) - timedelta(minutes=30)
        payload = {
            "vehicle_id": 1,
            "positions": [
                {"latitude": latitude, "longitude": 23.7275,
                 "recorded_at": (start + timedelta(minutes=i)).isoformat()}
                for i, latitude in enumerate((37.980, 37.981, 37.982))
            ],
        }
        assert client.post("/api/v1/gps/positions/batch", json=payload).status_code == 200
        return payload

    def test_positions_default_window(self, client, track):
        response = client.get("/api/v1/gps/vehicle/1/positions")

        assert response.status_code == 200
        latitudes = [p["latitude"] for p in response.json()["data"]]
        assert latitudes == [37.980, 37.981, 37.982]

    def test_positions_explicit_window(self, client, track):
        response = client.get(
            "/api/v1/gps/vehicle/1/positions",
            params={
                "from": track["positions"][1]["recorded_at"],
                "to": track["positions"][2]["recorded_at"],
            },
        )
        assert len(response.json()["data"]) == 2

    def test_from_after_to_is_400(self, client):
        response = client.get(
            "/api/v1/gps/vehicle/1/positions",
            params={"from": _timestamp(10), "to": _timestamp(20)},
        )
        assert response.status_code == 400

    def test_route(self, client, track):
        response = client.get("/api/v1/gps/vehicle/1/route")

        data = response.json()["data"]
        assert data["vehicle_name"] == "VAN-001"
        assert data["position_count"] == 3
        assert data["total_distance_meters"] == pytest.approx(222.4, rel=1e-2)

    def test_route_unknown_vehicle_is_404(self, client):
        response = client.get("/api/v1/gps/vehicle/999/route")

        assert response.status_code == 404
        assert response.json()["message"] == "Vehicle with ID '999' was not found."

    def test_route_statistics(self, client, track):
        data = client.get("/api/v1/gps/vehicle/1/route/statistics").json()["data"]

        assert data["position_count"] == 3
        assert data["duration_seconds"] == 120.0

    def test_last_position(self, client, track):
        data = client.get("/api/v1/gps/vehicle/1/last-position").json()["data"]
        assert data["latitude"] == 37.982

    def test_last_position_without_data(self, client):
        response = client.get("/api/v1/gps/vehicle/1/last-position")

        assert response.status_code == 200
        assert response.json()["data"] is None
        assert response.json()["message"] == "No positions found for this vehicle"


class TestVehicles:

    def test_list(self, client):
        data = client.get("/api/v1/vehicles").json()["data"]
        assert [v["name"] for v in data] == ["TRUCK-002", "VAN-001"]

    def test_get(self, client):
        data = client.get("/api/v1/vehicles/2").json()["data"]
        assert data["is_active"] is False

    def test_get_missing_is_404(self, client):
        assert client.get("/api/v1/vehicles/999").status_code == 404

    def test_with_last_positions(self, client):
        client.post("/api/v1/gps/position", json=_position(vehicle_id=1))

        data = client.get("/api/v1/vehicles/with-last-positions").json()["data"]

        by_name = {item["vehicle"]["name"]: item for item in data}
        assert by_name["VAN-001"]["last_position"]["vehicle_id"] == 1
        assert by_name["TRUCK-002"]["last_position"] is None

    def test_single_with_last_position(self, client):
        data = client.get("/api/v1/vehicles/1/with-last-position").json()["data"]
        assert data["vehicle"]["id"] == 1
        assert data["last_position"] is None


class TestHealth:

    def test_simple(self, client):
        assert client.get("/api/v1/health").json() == {"status": "ok"}

    def test_detailed_is_degraded_without_redis(self, client):
        response = client.get("/api/v1/health/detailed")

        assert response.status_code == 200
        body = response.json()
        assert body["components"]["database"]["status"] == "healthy"
        assert body["status"] == "degraded"
