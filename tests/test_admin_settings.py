"""Site settings: public read, admin gated write, audit entry."""

import pytest

from conftest import ADMIN_ID

URL = "/api/v1/admin/settings"


@pytest.fixture
def settings_row(fake_supabase):
    row = {"id": "settings-1", "site_title": "Marketplace", "footer_enabled": True, "custom_footer_links": [{"label": "Blog", "url": "/blog"}]}
    fake_supabase.tables["admin_settings"] = [row]
    return row


def test_public_read(client, settings_row):
    response = client.get(URL)

    assert response.status_code == 200
    assert response.json()["site_title"] == "Marketplace"
    assert response.json()["custom_footer_links"][0]["label"] == "Blog"


def test_missing_row_is_not_found(client):
    response = client.get(URL)

    assert response.status_code == 404
    assert response.json() == {"error": "Settings not found", "code": "NOT_FOUND"}


def test_write_without_credentials(client, settings_row):
    response = client.patch(URL, json={"site_title": "New"})

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_write_by_non_admin(client, settings_row, worker_headers, fake_supabase):
    response = client.patch(URL, json={"site_title": "New"}, headers=worker_headers)

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"
    assert "admin_settings" not in fake_supabase.updates


def test_wrong_secret(client, settings_row):
    response = client.patch(URL, json={"site_title": "New"}, headers={"x-admin-secret": "guess"})
    assert response.status_code == 403


def test_admin_patch_merges_and_returns_fresh_snapshot(client, settings_row, admin_headers, fake_supabase):
    response = client.patch(URL, json={"site_title": "New title", "contact_email": "hi@example.com"}, headers={**admin_headers, "User-Agent": "pytest"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Settings updated successfully"
    assert body["settings"]["site_title"] == "New title"
    # untouched keys survive the shallow merge
    assert body["settings"]["footer_enabled"] is True
    assert body["settings"]["updated_by"] == ADMIN_ID

    actions = fake_supabase.inserts["admin_actions"]
    assert len(actions) == 1
    assert actions[0]["action_type"] == "update_settings"
    assert actions[0]["changes"] == {"site_title": "New title", "contact_email": "hi@example.com"}
    assert actions[0]["user_agent"] == "pytest"


def test_post_is_an_alias(client, settings_row, admin_headers):
    response = client.post(URL, json={"footer_enabled": False}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["settings"]["footer_enabled"] is False


def test_empty_update_is_rejected(client, settings_row, admin_headers):
    response = client.patch(URL, json={}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "No settings to update"


def test_persistence_error_passes_message_through(client, settings_row, admin_headers, fake_supabase):
    fake_supabase.fail("admin_settings", "update")

    response = client.patch(URL, json={"site_title": "New"}, headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "update on admin_settings failed", "code": "DATABASE_ERROR"}


def test_secret_write_without_identity_skips_audit(client, settings_row, secret_headers, fake_supabase):
    response = client.patch(URL, json={"site_title": "Via secret"}, headers=secret_headers)

    assert response.status_code == 200
    assert "admin_actions" not in fake_supabase.inserts
