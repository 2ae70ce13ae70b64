from __future__ import annotations

import pytest
from pydantic import ValidationError

from techquiry.shared.config import AppConfig, load_config
from techquiry.shared.errors.base import ConfigurationError


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "APP_ENV", "SECRET_KEY", "ENABLE_RATE_LIMIT", "ENABLE_CSRF"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig(_env_file=None)

    assert config.port == 8080
    assert config.database.url == "sqlite:///techquiry.db"
    assert config.hashing.algorithm == "sha256"
    assert config.hashing.salt_length == 16
    assert config.security.enable_rate_limit is True
    assert config.is_production() is False


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("HASHING_ALGORITHM", "SHA-512")
    monkeypatch.setenv("SALT_LENGTH", "32")
    monkeypatch.setenv("COOKIE_SECURE", "yes")
    monkeypatch.setenv("DEBUG_LOGGING", "1")

    config = AppConfig(_env_file=None)

    assert config.port == 9000
    assert config.hashing.algorithm == "sha512"
    assert config.hashing.salt_length == 32
    assert config.security.cookie_secure is True
    assert config.debug_logging is True


def test_rejects_unknown_hash_algorithm(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HASHING_ALGORITHM", "rot13")

    with pytest.raises(ValidationError):
        AppConfig(_env_file=None)


def test_production_requires_real_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "dev")

    with pytest.raises(ValidationError):
        AppConfig(_env_file=None)

    monkeypatch.setenv("SECRET_KEY", "f3b1c9e0a7d24c5e8b6a")
    assert AppConfig(_env_file=None).is_production()


def test_load_config_wraps_invalid_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "not-a-port")
    load_config.cache_clear()
    try:
        with pytest.raises(ConfigurationError):
            load_config()
    finally:
        monkeypatch.undo()
        load_config.cache_clear()


def test_allowed_origins_from_comma_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")

    config = AppConfig(_env_file=None)

    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]
