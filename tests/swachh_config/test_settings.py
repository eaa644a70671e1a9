"""Tests for settings parsing."""

from datetime import timedelta

import pytest
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from swachh_config import Settings, get_settings, parse_duration


def _settings(**overrides) -> Settings:
    values = {
        "jwt_access_secret": SecretStr("topsecretvalue"),
        "jwt_refresh_secret": SecretStr("r"),
    }
    values.update(overrides)
    return Settings(**values)


class TestParseDuration:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("15m", timedelta(minutes=15)),
            ("7d", timedelta(days=7)),
            ("2h", timedelta(hours=2)),
            ("30s", timedelta(seconds=30)),
            ("3600", timedelta(seconds=3600)),
            (900, timedelta(seconds=900)),
        ],
    )
    def test_valid_durations(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "15x", "m", "-5m", "0"])
    def test_invalid_durations(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)


class TestSettings:
    def test_defaults(self):
        settings = _settings()

        assert settings.access_token_ttl == timedelta(minutes=15)
        assert settings.refresh_token_ttl == timedelta(days=7)
        assert settings.bcrypt_rounds == 12
        assert settings.api_port == 3001
        assert not settings.cookie_secure

    def test_cookies_secure_in_production(self):
        assert _settings(environment="production").cookie_secure

    def test_cors_origins_are_split(self):
        settings = _settings(api_cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_invalid_duration_rejected(self):
        with pytest.raises(PydanticValidationError):
            _settings(jwt_access_expires_in="soon")

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_bcrypt_rounds_bounds(self, rounds):
        with pytest.raises(PydanticValidationError):
            _settings(bcrypt_rounds=rounds)

    def test_secrets_are_masked(self):
        settings = _settings()

        assert "topsecretvalue" not in repr(settings.jwt_access_secret)
        assert settings.jwt_access_secret.get_secret_value() == "topsecretvalue"

    def test_get_settings_reads_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_ACCESS_EXPIRES_IN", "5m")

        settings = get_settings()

        assert settings.access_token_ttl == timedelta(minutes=5)
        assert settings.jwt_refresh_secret.get_secret_value()
