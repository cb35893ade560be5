import os

import pytest

from drawroom.config import settings as settings_module
from drawroom.wheel.models import WheelItem


@pytest.fixture
def items():
    return [
        WheelItem("a", "Alice"),
        WheelItem("b", "Bob"),
        WheelItem("c", "Carol"),
        WheelItem("d", "Dave"),
    ]


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    # Settings are cached per process; tests must not see each other's env
    for key in list(os.environ):
        if key.startswith("DRAWROOM_"):
            monkeypatch.delenv(key, raising=False)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()
