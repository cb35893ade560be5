import pytest
from pydantic import ValidationError

from drawroom.config.settings import Settings, get_settings
from drawroom.main import build_room
from drawroom.core.events import EventBus


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.env == "simulator"
    assert settings.is_simulator
    assert settings.wheel.spin_count == 6
    assert settings.wheel.duration_ms == 4800
    assert settings.wheel.easing == "wheel_spin"
    assert settings.room.api_base == "http://127.0.0.1:8000"
    assert settings.room.room_id == "r1"


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("DRAWROOM_ENV", "headless")
    monkeypatch.setenv("DRAWROOM_WHEEL__SPIN_COUNT", "8")
    monkeypatch.setenv("DRAWROOM_ROOM__ROOM_ID", "party")

    settings = Settings(_env_file=None)
    assert not settings.is_simulator
    assert settings.wheel.spin_count == 8
    assert settings.room.room_id == "party"


def test_invalid_values_rejected(monkeypatch):
    monkeypatch.setenv("DRAWROOM_WHEEL__DURATION_MS", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_build_room_uses_settings(monkeypatch):
    monkeypatch.setenv("DRAWROOM_WHEEL__SPIN_COUNT", "3")
    monkeypatch.setenv("DRAWROOM_WHEEL__SIZE", "240")

    room, renderer = build_room(Settings(_env_file=None), EventBus())
    assert room.spin_count == 3
    assert room.duration_ms == 4800
    assert renderer.size == 240
    assert room.client.room_id == "r1"
