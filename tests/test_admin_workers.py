"""Worker moderation and the audit entries it leaves."""

from conftest import ADMIN_ID, WORKER_ID

BASE = f"/api/v1/admin/workers/{WORKER_ID}"


def test_approve_with_secret_writes_exactly_one_audit_row(client, fake_supabase, secret_headers):
    payload = {"admin_id": ADMIN_ID, "admin_email": "admin@example.com", "worker_name": "Lan"}

    response = client.post(f"{BASE}/approve", json=payload, headers={**secret_headers, "x-forwarded-for": "10.0.0.7, 10.0.0.1"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Worker profile approved successfully"}

    profile = fake_supabase.row("worker_profiles", WORKER_ID)
    assert profile["approval_status"] == "approved"
    assert profile["approved_by"] == ADMIN_ID
    assert profile["profile_status"] == "active"

    actions = fake_supabase.inserts["admin_actions"]
    assert len(actions) == 1
    assert actions[0]["action_type"] == "approve_worker"
    assert actions[0]["target_type"] == "worker_profile"
    assert actions[0]["target_id"] == WORKER_ID
    assert actions[0]["target_name"] == "Lan"
    assert actions[0]["ip_address"] == "10.0.0.7"


def test_approve_with_secret_needs_identity(client, fake_supabase, secret_headers):
    response = client.post(f"{BASE}/approve", json={}, headers=secret_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Admin ID and email are required"
    assert fake_supabase.row("worker_profiles", WORKER_ID).get("approval_status") is None


def test_session_identity_wins_over_body(client, fake_supabase, admin_headers):
    response = client.post(f"{BASE}/approve", json={"admin_id": "someone-else", "admin_email": "x@example.com"}, headers=admin_headers)

    assert response.status_code == 200
    assert fake_supabase.inserts["admin_actions"][0]["admin_id"] == ADMIN_ID


def test_audit_failure_does_not_roll_back(client, fake_supabase, admin_headers):
    fake_supabase.fail("admin_actions", "insert")

    response = client.post(f"{BASE}/approve", json={}, headers=admin_headers)

    assert response.status_code == 200
    assert fake_supabase.row("worker_profiles", WORKER_ID)["approval_status"] == "approved"


def test_reject_requires_reason(client, admin_headers):
    response = client.post(f"{BASE}/reject", json={}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Rejection reason is required"


def test_reject(client, fake_supabase, admin_headers):
    response = client.post(f"{BASE}/reject", json={"reason": "Blurry photos"}, headers=admin_headers)

    assert response.status_code == 200
    profile = fake_supabase.row("worker_profiles", WORKER_ID)
    assert profile["approval_status"] == "rejected"
    assert profile["rejection_reason"] == "Blurry photos"
    assert fake_supabase.inserts["admin_actions"][0]["reason"] == "Blurry photos"


def test_unknown_worker(client, admin_headers):
    response = client.post("/api/v1/admin/workers/ghost/approve", json={}, headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["code"] == "PROFILE_NOT_FOUND"


class TestAccountActions:
    def test_suspend_and_unsuspend(self, client, fake_supabase, admin_headers):
        response = client.post(f"{BASE}/suspend", json={"action": "suspend", "reason": "Spam"}, headers=admin_headers)

        assert response.status_code == 200
        user = fake_supabase.row("users", WORKER_ID)
        assert user["account_status"] == "suspended"
        assert user["suspended_by"] == ADMIN_ID
        assert user["suspension_reason"] == "Spam"

        client.post(f"{BASE}/suspend", json={"action": "unsuspend"}, headers=admin_headers)

        user = fake_supabase.row("users", WORKER_ID)
        assert user["account_status"] == "active"
        assert user["suspension_reason"] is None
        assert [a["action_type"] for a in fake_supabase.inserts["admin_actions"]] == ["suspend_user", "unsuspend_user"]

    def test_wrong_action_for_endpoint(self, client, admin_headers):
        response = client.post(f"{BASE}/suspend", json={"action": "ban", "reason": "x"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == 'Invalid action. Use "suspend" or "unsuspend"'

    def test_ban_requires_reason(self, client, admin_headers):
        response = client.post(f"{BASE}/ban", json={"action": "ban"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Ban reason is required"


def test_list_filters_by_approval_status(client, fake_supabase, admin_headers):
    fake_supabase.tables["users"][1]["worker_profiles"] = {"approval_status": "pending", "city": "Hanoi"}
    fake_supabase.tables["users"].append(
        {"id": "worker-2", "email": "two@example.com", "role": "worker", "full_name": "Two", "worker_profiles": {"approval_status": "approved"}}
    )

    response = client.get("/api/v1/admin/workers", params={"status": "pending"}, headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["workers"][0]["id"] == WORKER_ID
    assert body["workers"][0]["worker_profile"]["city"] == "Hanoi"


def test_admin_notes(client, fake_supabase, admin_headers):
    response = client.put(f"{BASE}/notes", json={"admin_notes": "Called on Monday"}, headers=admin_headers)

    assert response.status_code == 200
    assert fake_supabase.row("users", WORKER_ID)["admin_notes"] == "Called on Monday"
    assert fake_supabase.inserts["admin_actions"][0]["action_type"] == "update_admin_notes"


def test_reads_require_admin(client, worker_headers):
    assert client.get("/api/v1/admin/workers").status_code == 401
    assert client.get("/api/v1/admin/workers", headers=worker_headers).status_code == 403


def test_profile_override_rederives_rates(client, fake_supabase, admin_headers):
    response = client.patch(BASE, json={"hourly_rate": 15, "city": "Hue"}, headers=admin_headers)

    assert response.status_code == 200
    profile = fake_supabase.row("worker_profiles", WORKER_ID)
    assert (profile["hourly_rate"], profile["daily_rate"], profile["monthly_rate"]) == (15, 120.0, 2400.0)
    assert fake_supabase.inserts["admin_actions"][0]["changes"]["daily_rate"] == 120.0


def test_profile_override_rejects_non_positive_or_non_finite_rate(client, fake_supabase, admin_headers):
    for rate in (0, -5, "nan", "inf"):
        response = client.patch(BASE, json={"hourly_rate": rate}, headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    assert "hourly_rate" not in fake_supabase.row("worker_profiles", WORKER_ID)
