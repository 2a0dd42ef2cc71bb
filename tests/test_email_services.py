"""Operations email sent when a worker finishes onboarding."""

import resend

from app.configs.app_settings import settings
from app.services.email_services import EmailService


def test_skipped_without_configuration(monkeypatch):
    sent = []
    monkeypatch.setattr(settings, "RESEND_API_KEY", None)
    monkeypatch.setattr(resend.Emails, "send", lambda params: sent.append(params))

    assert EmailService.send_worker_onboarding_notification("worker-1", "Lan", "lan@example.com", "assistance") is False
    assert sent == []


def test_sends_to_operations_inbox(monkeypatch):
    sent = []
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(settings, "ADMIN_NOTIFICATION_EMAIL", "ops@example.com")
    monkeypatch.setattr(resend.Emails, "send", lambda params: sent.append(params) or {"id": "email-1"})

    assert EmailService.send_worker_onboarding_notification("worker-1", "Lan", "lan@example.com", "assistance") is True
    assert sent[0]["to"] == ["ops@example.com"]
    assert sent[0]["subject"] == "Worker onboarding completed: Lan"
    assert "/admin/workers/worker-1" in sent[0]["html"]


def test_provider_failure_is_swallowed(monkeypatch):
    def fail(params):
        raise RuntimeError("resend is down")

    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(settings, "ADMIN_NOTIFICATION_EMAIL", "ops@example.com")
    monkeypatch.setattr(resend.Emails, "send", fail)

    assert EmailService.send_worker_onboarding_notification("worker-1", None, None, None) is False
