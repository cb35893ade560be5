"""Configuration for DRAWROOM."""

from drawroom.config.settings import (
    Settings,
    WheelSettings,
    RoomSettings,
    SimulatorSettings,
    get_settings,
)

__all__ = [
    "Settings",
    "WheelSettings",
    "RoomSettings",
    "SimulatorSettings",
    "get_settings",
]
