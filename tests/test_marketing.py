"""Tests for the marketing broadcast endpoint."""
from datetime import datetime, timezone

from vininfo.application.services.token_service import TokenService
from tests.helpers import make_user, unsubscribe_token_from

CAMPAIGN = {
    "subject": "Jarní kontrola vozu",
    "preheader": "Nezapomeňte na STK",
    "heading": "Připravte auto na jaro",
    "content": "<p>Zkontrolujte si <strong>termín STK</strong>.</p>",
    "ctaText": "Otevřít VINInfo",
    "ctaUrl": "https://vininfo.cz",
}
ADMIN = {"Authorization": "Bearer admin-secret"}


def send(client, headers=ADMIN, **extra):
    body = dict(CAMPAIGN)
    body.update(extra)
    return client.post("/api/admin/send-marketing", json=body, headers=headers)


class TestAuthorization:

    def test_missing_or_wrong_secret(self, client):
        assert send(client, headers={}).status_code == 401
        assert send(client, headers={"Authorization": "Bearer nope"}).status_code == 401

    def test_falls_back_to_cron_secret(self, client, settings):
        settings.ADMIN_SECRET = ""
        assert send(client, headers={"Authorization": "Bearer cron-secret"}).status_code == 200

    def test_no_secret_configured(self, client, settings):
        settings.ADMIN_SECRET = ""
        settings.CRON_SECRET = ""
        resp = send(client, headers={})
        assert resp.status_code == 500
        assert resp.json()["error"]["code"] == "ConfigError"


class TestBroadcast:

    def test_sends_to_opted_in_users_oldest_first(self, client, db, email_client):
        make_user(db, "novy@example.cz", created_at=datetime(2026, 2, 1, tzinfo=timezone.utc))
        make_user(db, "stary@example.cz", created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))
        make_user(db, "odhlaseny@example.cz", marketing_enabled=False)

        resp = send(client)

        assert resp.status_code == 200
        assert resp.json() == {
            "message": "Sent 2 of 2 marketing emails",
            "sent": 2,
            "total": 2,
            "testMode": False,
        }
        assert [m.to for m in email_client.sent] == ["stary@example.cz", "novy@example.cz"]
        message = email_client.sent[0]
        assert message.subject == CAMPAIGN["subject"]
        assert CAMPAIGN["content"] in message.html
        assert "https://vininfo.cz" in message.html

    def test_unsubscribe_link_targets_marketing(self, client, db, email_client, settings):
        user = make_user(db)
        send(client)
        claims = TokenService(settings).verify_unsubscribe_token(unsubscribe_token_from(email_client.sent[0].html))
        assert claims.user_id == user.id
        assert claims.preference == "marketing"

    def test_per_recipient_failure(self, client, db, email_client):
        make_user(db, "a@example.cz")
        make_user(db, "b@example.cz")
        email_client.fail_for.add("a@example.cz")

        body = send(client).json()

        assert body["sent"] == 1
        assert body["total"] == 2
        assert body["errors"] == [{"recipient": "a@example.cz", "error": "422: invalid recipient"}]

    def test_missing_provider_key(self, client, db, email_client):
        make_user(db)
        email_client.api_key = ""
        assert send(client).status_code == 500
        assert email_client.sent == []

    def test_missing_jwt_secret(self, client, db, email_client, settings):
        make_user(db)
        settings.JWT_SECRET = ""
        resp = send(client)
        assert resp.status_code == 500
        assert resp.json()["error"]["code"] == "ConfigError"
        assert email_client.sent == []

    def test_invalid_campaign(self, client):
        resp = client.post("/api/admin/send-marketing", json={"subject": "Bez obsahu"}, headers=ADMIN)
        assert resp.status_code == 400


class TestTestMode:

    def test_sends_only_to_test_address(self, client, db, email_client, settings):
        make_user(db, "a@example.cz")
        opted_out = make_user(db, "tester@example.cz", marketing_enabled=False)

        body = send(client, testEmail="tester@example.cz").json()

        assert body["testMode"] is True
        assert body["sent"] == 1
        assert body["total"] == 1
        [message] = email_client.sent
        assert message.to == "tester@example.cz"
        claims = TokenService(settings).verify_unsubscribe_token(unsubscribe_token_from(message.html))
        assert claims.user_id == opted_out.id

    def test_unknown_address_uses_placeholder_id(self, client, email_client, settings):
        send(client, testEmail="externi@example.cz")
        claims = TokenService(settings).verify_unsubscribe_token(unsubscribe_token_from(email_client.sent[0].html))
        assert claims.user_id == "test-user-id"
