"""Tests for session/unsubscribe tokens, verification codes and the resend cooldown."""
from datetime import datetime, timedelta, timezone

import pytest

from vininfo.application.services.token_service import TokenService
from vininfo.config import Settings
from vininfo.core.exceptions import AuthError, ConfigError

NOW = datetime(2026, 3, 10, 8, 0, tzinfo=timezone.utc)


def make_service(now=NOW, **overrides) -> TokenService:
    values = {"JWT_SECRET": "unit-test-secret"}
    values.update(overrides)
    return TokenService(Settings(**values), now=lambda: now)


class TestSessionTokens:

    def test_round_trip(self):
        tokens = make_service()
        token = tokens.issue_session_token("user-1")
        assert tokens.verify_session_token(token) == "user-1"

    def test_tampered_token_rejected(self):
        tokens = make_service()
        token = tokens.issue_session_token("user-1")
        head, payload, signature = token.split(".")
        forged = ".".join([head, payload, signature[::-1]])
        with pytest.raises(AuthError):
            tokens.verify_session_token(forged)

    def test_other_secret_rejected(self):
        token = make_service(JWT_SECRET="one").issue_session_token("user-1")
        with pytest.raises(AuthError):
            make_service(JWT_SECRET="two").verify_session_token(token)

    def test_expired_after_thirty_days(self):
        token = make_service().issue_session_token("user-1")
        assert make_service(now=NOW + timedelta(days=29)).verify_session_token(token) == "user-1"
        with pytest.raises(AuthError):
            make_service(now=NOW + timedelta(days=30, seconds=1)).verify_session_token(token)

    def test_unsubscribe_token_is_not_a_session(self):
        tokens = make_service()
        token = tokens.issue_unsubscribe_token("user-1", "notifications")
        with pytest.raises(AuthError):
            tokens.verify_session_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthError):
            make_service().verify_session_token("not-a-token")
        with pytest.raises(AuthError):
            make_service().verify_session_token("")

    def test_auth_error_message_is_generic(self):
        with pytest.raises(AuthError) as exc_info:
            make_service().verify_session_token("not-a-token")
        assert exc_info.value.message == "Unauthorized"

    def test_missing_secret_is_config_error(self):
        tokens = make_service(JWT_SECRET="")
        with pytest.raises(ConfigError):
            tokens.issue_session_token("user-1")
        with pytest.raises(ConfigError):
            tokens.verify_session_token("anything")

    def test_decode_unverified(self):
        token = make_service().issue_session_token("user-1")
        assert TokenService.decode_unverified(token) == "user-1"
        assert TokenService.decode_unverified("garbage") is None
        assert TokenService.decode_unverified(None) is None


class TestUnsubscribeTokens:

    @pytest.mark.parametrize("preference", ["notifications", "marketing"])
    def test_round_trip(self, preference):
        tokens = make_service()
        claims = tokens.verify_unsubscribe_token(tokens.issue_unsubscribe_token("user-1", preference))
        assert claims.user_id == "user-1"
        assert claims.preference == preference

    def test_unknown_preference_cannot_be_issued(self):
        with pytest.raises(ValueError):
            make_service().issue_unsubscribe_token("user-1", "everything")

    def test_session_token_is_not_an_unsubscribe_token(self):
        tokens = make_service()
        with pytest.raises(AuthError):
            tokens.verify_unsubscribe_token(tokens.issue_session_token("user-1"))

    def test_unknown_preference_claim_rejected(self):
        tokens = make_service()
        forged = tokens._encode(
            {"sub": "user-1", "purpose": "unsubscribe-everything", "pref": "everything"},
            timedelta(days=1),
        )
        with pytest.raises(AuthError):
            tokens.verify_unsubscribe_token(forged)

    def test_expires_after_thirty_days(self):
        token = make_service().issue_unsubscribe_token("user-1", "marketing")
        with pytest.raises(AuthError):
            make_service(now=NOW + timedelta(days=31)).verify_unsubscribe_token(token)


class TestVerificationCodes:

    def test_six_digits_in_range(self):
        for _ in range(1000):
            code = TokenService.generate_verification_code()
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_expiry_is_24_hours(self):
        assert make_service().verification_expiry(NOW) == NOW + timedelta(hours=24)


class TestResendCooldown:

    def test_allowed_without_previous_send(self):
        assert make_service().resend_retry_after(None) == 0

    def test_blocked_right_after_send(self):
        assert make_service().resend_retry_after(NOW) == 60

    def test_rounds_remaining_seconds_up(self):
        tokens = make_service(now=NOW + timedelta(seconds=59, milliseconds=500))
        assert tokens.resend_retry_after(NOW) == 1

    def test_allowed_after_cooldown(self):
        assert make_service(now=NOW + timedelta(seconds=61)).resend_retry_after(NOW) == 0

    def test_legacy_rows_use_expiry_minus_ttl(self):
        expires_at = NOW + timedelta(hours=24)
        tokens = make_service(now=NOW + timedelta(seconds=10))
        assert tokens.resend_retry_after(None, expires_at) == 50

    def test_naive_timestamps_treated_as_utc(self):
        naive = NOW.replace(tzinfo=None)
        assert make_service(now=NOW + timedelta(seconds=30)).resend_retry_after(naive) == 30

    def test_code_just_sent_by_expiry_alone(self):
        tokens = make_service()
        assert tokens.resend_retry_after(None, NOW + timedelta(hours=24)) == 60
        later = make_service(now=NOW + timedelta(seconds=61))
        assert later.resend_retry_after(None, NOW + timedelta(hours=24)) == 0
