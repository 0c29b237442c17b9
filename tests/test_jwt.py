"""Tests for token issuance and validation."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from userdirectory.auth.jwt import TokenIssuer
from userdirectory.config import JwtSettings
from userdirectory.errors import ConfigurationError


def _raw_claims(token, settings):
    return jwt.decode(
        token,
        settings.signing_key,
        algorithms=["HS256"],
        audience=settings.audience,
        issuer=settings.issuer,
    )


class TestTokenIssuer:

    def test_issue_encodes_required_claims(self, token_issuer, jwt_settings):
        token = token_issuer.issue("someone@example.com")
        claims = _raw_claims(token, jwt_settings)

        assert claims["sub"] == "someone@example.com"
        assert claims["iss"] == jwt_settings.issuer
        assert claims["aud"] == jwt_settings.audience
        assert claims["jti"]
        assert jwt.get_unverified_header(token)["alg"] == "HS256"

    def test_default_expiry_is_three_days(self, token_issuer, jwt_settings):
        before = datetime.now(timezone.utc)
        claims = _raw_claims(token_issuer.issue("a@example.com"), jwt_settings)
        expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)

        assert timedelta(days=3) - timedelta(seconds=5) <= expires - before <= timedelta(days=3, seconds=5)

    def test_each_token_has_unique_jti(self, token_issuer, jwt_settings):
        first = _raw_claims(token_issuer.issue("a@example.com"), jwt_settings)
        second = _raw_claims(token_issuer.issue("a@example.com"), jwt_settings)
        assert first["jti"] != second["jti"]

    def test_get_subject_round_trip(self, token_issuer):
        assert token_issuer.get_subject(token_issuer.issue("b@example.com")) == "b@example.com"

    def test_expired_token_is_rejected(self, token_issuer):
        token = token_issuer.issue("c@example.com", expires_in=timedelta(seconds=-10))
        assert token_issuer.decode(token) is None

    def test_wrong_audience_is_rejected(self, token_issuer, jwt_settings):
        other = TokenIssuer(jwt_settings.model_copy(update={"audience": "someone-else"}))
        assert token_issuer.decode(other.issue("d@example.com")) is None

    def test_wrong_key_is_rejected(self, token_issuer, jwt_settings):
        other = TokenIssuer(jwt_settings.model_copy(update={"signing_key": "a-different-signing-key-of-decent-length"}))
        assert token_issuer.decode(other.issue("e@example.com")) is None

    def test_garbage_token_is_rejected(self, token_issuer):
        assert token_issuer.get_subject("not.a.token") is None

    @pytest.mark.parametrize("field", ["signing_key", "issuer", "audience"])
    def test_missing_setting_fails_at_construction(self, jwt_settings, field):
        with pytest.raises(ConfigurationError):
            TokenIssuer(jwt_settings.model_copy(update={field: ""}))


class TestJwtSettingsFromEnv:

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_KEY", "env-signing-key-with-enough-length-1234")
        monkeypatch.setenv("JWT_ISSUER", "env-issuer")
        monkeypatch.setenv("JWT_AUDIENCE", "env-audience")

        settings = JwtSettings.from_env()
        assert settings.issuer == "env-issuer"
        assert settings.audience == "env-audience"
        assert settings.lifetime_days == 3

    def test_missing_variables_are_all_reported(self, monkeypatch):
        monkeypatch.setenv("JWT_KEY", "env-signing-key-with-enough-length-1234")
        monkeypatch.delenv("JWT_ISSUER", raising=False)
        monkeypatch.delenv("JWT_AUDIENCE", raising=False)

        with pytest.raises(ConfigurationError, match="JWT_ISSUER, JWT_AUDIENCE"):
            JwtSettings.from_env()
