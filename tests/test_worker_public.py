"""Public worker pages: detail, reviews and the availability calendar."""

import pytest

from app.custom_error import ValidationError
from app.services.availability_services import AvailabilityService
from conftest import EMPLOYER_ID, WORKER_ID


def seed_view(fake_supabase, **overrides):
    row = {"id": WORKER_ID, "email": "worker@example.com", "full_name": "Lan", "city": "Hanoi", **overrides}
    fake_supabase.tables["worker_profiles_with_user"] = [row]


class TestDetail:
    def test_approved_profile_is_public(self, client, fake_supabase):
        seed_view(fake_supabase, approval_status="approved", profile_status="active")

        response = client.get(f"/api/v1/workers/{WORKER_ID}")

        assert response.status_code == 200
        assert response.json()["full_name"] == "Lan"

    @pytest.mark.parametrize(
        "overrides",
        [{"approval_status": "pending"}, {"approval_status": "rejected"}, {"approval_status": "approved", "profile_status": "suspended"}],
    )
    def test_hidden_profiles(self, client, fake_supabase, overrides):
        seed_view(fake_supabase, **overrides)

        response = client.get(f"/api/v1/workers/{WORKER_ID}")

        assert response.status_code == 404
        assert response.json() == {"error": "Worker profile not found", "code": "PROFILE_NOT_FOUND"}


class TestReviews:
    def test_distribution_covers_all_visible_reviews(self, client, fake_supabase):
        fake_supabase.tables["reviews"] = [
            {"id": "r1", "worker_id": WORKER_ID, "rating": 5, "is_hidden": False},
            {"id": "r2", "worker_id": WORKER_ID, "rating": 4, "is_hidden": False},
            {"id": "r3", "worker_id": WORKER_ID, "rating": 4, "is_hidden": False},
            {"id": "r4", "worker_id": WORKER_ID, "rating": 1, "is_hidden": True},
            {"id": "r5", "worker_id": "someone-else", "rating": 1, "is_hidden": False},
        ]
        fake_supabase.tables["reviews_with_user"] = [
            {"id": f"r{i}", "worker_id": WORKER_ID, "employer_id": EMPLOYER_ID, "rating": 4, "is_hidden": i == 4, "created_at": f"2025-01-0{i}T00:00:00+00:00"}
            for i in (1, 2, 3, 4)
        ]

        response = client.get(f"/api/v1/workers/{WORKER_ID}/reviews", params={"limit": 2})

        assert response.status_code == 200
        body = response.json()
        # r4 is the newest but hidden
        assert [review["id"] for review in body["reviews"]] == ["r3", "r2"]
        assert body["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 2, "5": 1}
        assert body["average_rating"] == 4.33
        assert body["total_reviews"] == 3

    def test_no_reviews(self, client):
        body = client.get(f"/api/v1/workers/{WORKER_ID}/reviews").json()

        assert body["reviews"] == []
        assert body["average_rating"] == 0.0
        assert body["total_reviews"] == 0


class TestAvailability:
    @pytest.fixture
    def bookings(self, fake_supabase):
        fake_supabase.tables["bookings"] = [
            {"id": "b1", "worker_id": WORKER_ID, "status": "confirmed", "start_date": "2025-05-30", "end_date": "2025-06-02"},
            {"id": "b2", "worker_id": WORKER_ID, "status": "pending", "start_date": "2025-06-10", "end_date": "2025-06-10"},
            {"id": "b3", "worker_id": WORKER_ID, "status": "cancelled", "start_date": "2025-06-15", "end_date": "2025-06-16"},
            {"id": "b4", "worker_id": "someone-else", "status": "confirmed", "start_date": "2025-06-20", "end_date": "2025-06-20"},
        ]

    def test_month_grid(self, client, bookings):
        response = client.get(f"/api/v1/workers/{WORKER_ID}/availability", params={"year": 2025, "month": 6})

        assert response.status_code == 200
        body = response.json()
        assert body["starting_day_of_week"] == 0  # 2025-06-01 is a Sunday
        assert len(body["days"]) == 30

        days = {day["date"]: day for day in body["days"]}
        assert days["2025-06-01"]["booking_ids"] == ["b1"]
        assert days["2025-06-02"]["is_booked"] is True
        assert days["2025-06-03"]["is_booked"] is False
        assert days["2025-06-10"]["is_available"] is False
        assert days["2025-06-15"]["is_booked"] is False
        assert days["2025-06-20"]["is_available"] is True

    def test_unavailable_worker_has_no_free_days(self, client, fake_supabase, bookings):
        fake_supabase.row("worker_profiles", WORKER_ID)["available"] = False

        body = client.get(f"/api/v1/workers/{WORKER_ID}/availability", params={"year": 2025, "month": 2}).json()

        assert body["starting_day_of_week"] == 6  # 2025-02-01 is a Saturday
        assert len(body["days"]) == 28
        assert not any(day["is_available"] for day in body["days"])

    def test_unknown_worker(self, client):
        response = client.get("/api/v1/workers/ghost/availability", params={"year": 2025, "month": 6})
        assert response.status_code == 404

    def test_month_out_of_range(self, client):
        response = client.get(f"/api/v1/workers/{WORKER_ID}/availability", params={"year": 2025, "month": 13})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_service_rejects_bad_month(self, fake_supabase):
        with pytest.raises(ValidationError):
            await AvailabilityService(fake_supabase).get_month_availability(WORKER_ID, 2025, 0)
