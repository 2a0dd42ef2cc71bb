"""Registration backup endpoint and OAuth callback."""

from conftest import ADMIN_ID, WORKER_ID

NEWCOMER = {"Authorization": "Bearer newcomer-token"}


class TestCreateUserProfile:
    def test_creates_user_with_email_as_name(self, client, fake_supabase):
        payload = {"userId": "u-9", "email": "nine@example.com", "role": "employer"}

        response = client.post("/api/v1/auth/create-user-profile", json=payload)

        assert response.status_code == 200
        assert response.json()["message"] == "User profile created successfully"
        inserted = fake_supabase.inserts["users"][0]
        assert inserted["full_name"] == "nine@example.com"
        assert inserted["preferred_language"] == "vi"

    def test_updates_existing_user(self, client, fake_supabase):
        payload = {"userId": WORKER_ID, "email": "worker@example.com", "role": "worker", "phone": "0912", "preferred_language": "en"}

        response = client.post("/api/v1/auth/create-user-profile", json=payload)

        assert response.status_code == 200
        assert response.json()["message"] == "User profile updated successfully"
        assert fake_supabase.row("users", WORKER_ID)["preferred_language"] == "en"
        assert "users" not in fake_supabase.inserts

    def test_existing_account_keeps_role_and_email(self, client, fake_supabase):
        payload = {"userId": ADMIN_ID, "email": "attacker@example.com", "role": "worker", "preferred_language": "ko"}

        response = client.post("/api/v1/auth/create-user-profile", json=payload)

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"
        admin = fake_supabase.row("users", ADMIN_ID)
        assert admin["role"] == "admin"
        assert admin["email"] == "admin@example.com"
        assert admin["preferred_language"] == "ko"

    def test_rejects_admin_role(self, client):
        payload = {"userId": "u-9", "email": "nine@example.com", "role": "admin"}

        response = client.post("/api/v1/auth/create-user-profile", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid role. Must be 'worker' or 'employer'", "code": "VALIDATION_ERROR"}

    def test_invalid_email_is_a_request_validation_error(self, client):
        response = client.post("/api/v1/auth/create-user-profile", json={"userId": "u-9", "email": "nope", "role": "worker"})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["error"].startswith("email")

    def test_exists_check(self, client):
        assert client.get("/api/v1/auth/create-user-profile", params={"userId": WORKER_ID}).json()["exists"] is True
        assert client.get("/api/v1/auth/create-user-profile", params={"userId": "ghost"}).json() == {"exists": False, "user": None}


class TestCallback:
    def test_new_user_without_role_goes_back_to_register(self, client, fake_supabase):
        response = client.post("/api/v1/auth/callback", json={"locale": "en"}, headers=NEWCOMER)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Registration error: Role is required. Please register again."
        assert body["redirect_to"] == "/en/register"
        assert "users" not in fake_supabase.inserts

    def test_new_user_with_invalid_role(self, client):
        response = client.post("/api/v1/auth/callback", json={"role": "admin"}, headers=NEWCOMER)

        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Registration error: Invalid role. Please register again."
        assert body["redirect_to"] == "/vi/register"

    def test_new_user_with_role_is_created(self, client, fake_supabase):
        response = client.post("/api/v1/auth/callback", json={"role": "worker"}, headers={**NEWCOMER, "Cookie": "NEXT_LOCALE=zh"})

        body = response.json()
        assert body["status"] == "success"
        assert body["redirect_to"] == "/zh"
        inserted = fake_supabase.inserts["users"][0]
        assert inserted["role"] == "worker"
        assert inserted["phone"] == "0900000000"
        assert inserted["preferred_language"] == "zh"

    def test_existing_user_keeps_role(self, client, fake_supabase, worker_headers):
        response = client.post("/api/v1/auth/callback", json={"role": "employer", "locale": "en"}, headers=worker_headers)

        body = response.json()
        assert body["message"] == "Welcome back! Redirecting..."
        assert body["redirect_to"] == "/en"
        assert body["user"]["role"] == "worker"
        assert "users" not in fake_supabase.updates

    def test_requires_session(self, client):
        response = client.post("/api/v1/auth/callback", json={"role": "worker"})
        assert response.status_code == 401


def test_session_user(client, worker_headers):
    assert client.get("/api/v1/auth/user").status_code == 401
    assert client.get("/api/v1/auth/user", headers={"Authorization": "Bearer forged"}).status_code == 401
    assert client.get("/api/v1/auth/user", headers=worker_headers).json()["id"] == WORKER_ID
