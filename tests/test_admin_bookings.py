"""Admin booking list and status overrides."""

import pytest

from conftest import EMPLOYER_ID, WORKER_ID

URL = "/api/v1/admin/bookings"


@pytest.fixture
def bookings(fake_supabase):
    fake_supabase.tables["bookings"] = [
        {"id": "booking-1", "worker_id": WORKER_ID, "employer_id": EMPLOYER_ID, "status": "pending", "start_date": "2025-06-10T09:00:00+00:00", "created_at": "2025-06-01T00:00:00+00:00"},
        {"id": "booking-2", "worker_id": WORKER_ID, "employer_id": EMPLOYER_ID, "status": "completed", "start_date": "2025-05-02T09:00:00+00:00", "created_at": "2025-05-01T00:00:00+00:00"},
    ]


def test_list_with_date_range(client, bookings, admin_headers):
    response = client.get(URL, params={"start_date": "2025-06-01"}, headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["bookings"][0]["id"] == "booking-1"


def test_status_update_is_audited(client, fake_supabase, bookings, admin_headers):
    response = client.put(f"{URL}/booking-1", json={"status": "confirmed"}, headers=admin_headers)

    assert response.status_code == 200
    assert fake_supabase.row("bookings", "booking-1")["status"] == "confirmed"

    action = fake_supabase.inserts["admin_actions"][0]
    assert action["action_type"] == "update_booking_status"
    assert action["changes"] == {"status": "confirmed"}
    assert action["target_name"] == "Booking booking-"


def test_status_required(client, bookings, admin_headers):
    response = client.put(f"{URL}/booking-1", json={}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Status is required"


def test_unknown_status_value(client, bookings, admin_headers):
    assert client.put(f"{URL}/booking-1", json={"status": "lost"}, headers=admin_headers).status_code == 422


def test_missing_booking(client, bookings, admin_headers):
    response = client.get(f"{URL}/nope", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Booking not found"
