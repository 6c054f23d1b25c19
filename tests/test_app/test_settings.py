from datetime import timedelta

import pytest
from pydantic import ValidationError

from frota.app.settings import (
    DEFAULT_PROD_DB_URL,
    AlertThresholds,
    AppSettings,
)


def test_default_thresholds():
    thresholds = AlertThresholds()

    assert thresholds.service_interval_km == 10_000
    assert thresholds.service_warning_km == 1_000
    assert (thresholds.document_high_days, thresholds.document_medium_days) == (30, 60)


def test_thresholds_reject_inverted_windows():
    with pytest.raises(ValidationError):
        AlertThresholds(document_high_days=90, document_medium_days=60)
    with pytest.raises(ValidationError):
        AlertThresholds(schedule_high_km=5000, schedule_medium_km=2000)
    with pytest.raises(ValidationError):
        AlertThresholds(service_interval_km=0)


def test_thresholds_are_immutable():
    thresholds = AlertThresholds()
    with pytest.raises(ValidationError):
        thresholds.service_interval_km = 5


def test_nested_threshold_override_from_environment(monkeypatch):
    monkeypatch.setenv("ALERTS__SERVICE_INTERVAL_KM", "15000")

    settings = AppSettings()

    assert settings.alerts.service_interval_km == 15000


def test_testing_preset_uses_memory_database():
    settings = AppSettings().with_environment("testing")

    assert settings.testing is True
    assert settings.debug is False
    assert settings.database.url == "sqlite:///:memory:"
    assert settings.features.enable_seed_permissions is False


def test_production_preset_hardens_cookies_and_database():
    settings = AppSettings().with_environment("production")

    assert settings.session_cookie_secure is True
    assert settings.database.url == DEFAULT_PROD_DB_URL
    assert settings.database.engine_options["pool_size"] == 20


def test_session_lifetime_accepts_seconds():
    settings = AppSettings(permanent_session_lifetime="3600")
    assert settings.permanent_session_lifetime == timedelta(hours=1)


def test_flask_config_carries_log_level():
    config = AppSettings().with_environment("testing").as_flask_config()

    assert config["SQLALCHEMY_TRACK_MODIFICATIONS"] is False
    assert config["WTF_CSRF_ENABLED"] is False
    assert "LOG_LEVEL" in config
