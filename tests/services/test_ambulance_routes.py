from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

LOCATION_ROW = {
    "latitude": -6.2088,
    "longitude": 106.8456,
    "is_busy": False,
    "address_text": "Jakarta",
    "updated_at": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
}


def test_get_location(client, mock_db):
    mock_db.fetchrow.return_value = LOCATION_ROW

    response = client.get("/api/ambulance")

    assert response.status_code == 200
    body = response.json()
    assert body["latitude"] == -6.2088
    assert body["isBusy"] is False
    assert body["addressText"] == "Jakarta"
    assert body["trackingActive"] is True


def test_get_location_missing(client):
    response = client.get("/api/ambulance")

    assert response.status_code == 404
    assert response.json()["error"] == "Location not found"
    assert response.json()["error_code"] == "not_found"


def test_update_location(client, mock_db, mock_geo):
    mock_db.fetchrow.return_value = LOCATION_ROW
    mock_geo.reverse_geocode.return_value = "Jakarta"

    response = client.put("/api/ambulance", json={"latitude": -6.2088, "longitude": 106.8456})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["trackingActive"] is True
    assert body["location"]["addressText"] == "Jakarta"
    mock_geo.reverse_geocode.assert_awaited_once_with(-6.2088, 106.8456)


def test_update_location_rejected_when_tracking_disabled(client, tracking, mock_db):
    tracking.toggle(False)

    response = client.put("/api/ambulance", json={"latitude": 1.0, "longitude": 2.0})

    assert response.status_code == 423
    body = response.json()
    assert body["error"] == "Ambulance tracking is currently disabled"
    assert body["trackingActive"] is False
    assert body["message"] == "Please enable tracking first before updating location"
    mock_db.execute.assert_not_awaited()


def test_tracking_disabled_body_keeps_message_detail(api_app, tracking):
    tracking.toggle(False)
    client = TestClient(api_app, raise_server_exceptions=False)

    response = client.put("/api/ambulance", json={"latitude": 1.0, "longitude": 2.0})

    assert response.status_code == 423
    assert response.json() == {
        "error": "Ambulance tracking is currently disabled",
        "error_code": "tracking_disabled",
        "trackingActive": False,
        "message": "Please enable tracking first before updating location",
    }


@pytest.mark.parametrize("header_value, expected_status", [
    ("true", 200),
    ("TRUE", 200),
    ("yes", 423),
    ("1", 423),
])
def test_admin_header_override(client, tracking, mock_db, header_value, expected_status):
    tracking.toggle(False)
    mock_db.fetchrow.return_value = LOCATION_ROW

    response = client.put(
        "/api/ambulance",
        json={"latitude": 1.0, "longitude": 2.0},
        headers={"X-Admin-Update": header_value},
    )

    assert response.status_code == expected_status


def test_update_location_without_body(client):
    response = client.put("/api/ambulance")

    assert response.status_code == 400
    assert response.json()["error_code"] == "validation_error"


def test_update_location_invalid_coordinates(client):
    response = client.put("/api/ambulance", json={"latitude": "north", "longitude": 2.0})

    assert response.status_code == 400


def test_update_status_allowed_when_tracking_disabled(client, tracking, mock_db):
    tracking.toggle(False)
    mock_db.fetchrow.return_value = {**LOCATION_ROW, "is_busy": True}

    response = client.put("/api/ambulance/status", json={"isBusy": True})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "isBusy": True,
        "trackingActive": False,
        "message": "Status changed to busy",
    }


def test_update_status_without_record(client, mock_db):
    mock_db.execute.return_value = "UPDATE 0"

    response = client.put("/api/ambulance/status", json={"isBusy": False})

    assert response.status_code == 404


def test_toggle_tracking(client, tracking):
    response = client.post("/api/ambulance/tracking/toggle", json={"enabled": False})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["ambulanceTrackingActive"] is False
    assert body["trackingActive"] is False
    assert body["message"] == "Tracking disabled"
    assert tracking.is_enabled() is False


@pytest.mark.parametrize("payload", [{"enabled": "true"}, {"enabled": 1}, {}])
def test_toggle_tracking_non_true_disables(client, tracking, payload):
    response = client.post("/api/ambulance/tracking/toggle", json=payload)

    assert response.status_code == 200
    assert response.json()["trackingActive"] is False
    assert tracking.is_enabled() is False


def test_toggle_tracking_without_body(client, tracking):
    response = client.post("/api/ambulance/tracking/toggle")

    assert response.status_code == 200
    assert tracking.is_enabled() is False


def test_tracking_status(client, clock):
    response = client.get("/api/ambulance/tracking/status")

    body = response.json()
    assert body["ambulanceTrackingActive"] is True
    assert body["trackingActive"] is True
    assert body["lastToggleTime"] == clock.now
    assert body["timestamp"].endswith("Z")


def test_broadcast_location(client, mock_db):
    mock_db.fetchrow.return_value = LOCATION_ROW

    response = client.post("/api/ambulance/broadcast-location")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Location broadcasted"
    assert body["data"]["latitude"] == -6.2088


def test_broadcast_location_without_record(client):
    response = client.post("/api/ambulance/broadcast-location")

    assert response.status_code == 404
    assert response.json()["error"] == "No ambulance location found"


def test_location_detail_fallback(client, mock_db):
    mock_db.fetchrow.return_value = {**LOCATION_ROW, "address_text": None}

    response = client.get("/api/ambulance/1/location-detail")

    assert response.status_code == 200
    assert response.json()["addressText"] == "Address not available"


def test_unexpected_error_is_500(api_app, mock_db):
    mock_db.fetchrow.side_effect = RuntimeError("connection reset")
    client = TestClient(api_app, raise_server_exceptions=False)

    response = client.get("/api/ambulance")

    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!", "error_code": "internal_error"}


def test_unknown_endpoint(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json()["error"] == "Endpoint not found"


def test_root_and_health(client, mock_db):
    root = client.get("/")
    health = client.get("/health")

    assert root.json()["ambulanceTrackingActive"] is True
    assert root.json()["endpoints"]["websocket"] == "/ws"
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert health.json()["dependencies"] == {"postgres": "healthy"}


def test_health_degraded(client, mock_db):
    mock_db.health_check.return_value = False

    response = client.get("/health")

    assert response.json()["status"] == "degraded"
