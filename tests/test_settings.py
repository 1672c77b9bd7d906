import importlib

import pytest

from config import get_settings_module
from room_monitor.core.enums import MidnightPolicy
from room_monitor.core.exceptions import ValidationError
from room_monitor.core.settings import EngineSettings


def test_settings_module_from_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "config.production"

    monkeypatch.setenv("APP_ENV", "testing")
    assert get_settings_module() == "config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_engine_settings_from_testing_module():
    settings = EngineSettings.from_module(importlib.import_module("config.testing"))

    assert settings.timezone == "America/Bogota"
    assert settings.late_grace_minutes == 5
    assert settings.midnight_policy == MidnightPolicy.REJECT
    assert settings.revalidate_updates is False


def test_engine_settings_defaults_and_bad_policy():
    class Partial:
        MIDNIGHT_POLICY = "ROLL_OVER"

    class Broken:
        MIDNIGHT_POLICY = "wrap"

    assert EngineSettings.from_module(Partial).midnight_policy == MidnightPolicy.ROLL_OVER
    assert EngineSettings.from_module(Partial).max_schedule_hours == 12
    with pytest.raises(ValidationError):
        EngineSettings.from_module(Broken)


def test_explicit_settings_module_wins(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("ROOM_MONITOR_SETTINGS", "config.testing")

    assert get_settings_module() == "config.testing"
