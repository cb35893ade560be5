"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. DRAWROOM_WHEEL__SPIN_COUNT=8.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WheelSettings(BaseSettings):
    """Wheel presentation settings."""

    # Spin defaults
    spin_count: int = Field(default=6, ge=0)
    duration_ms: int = Field(default=4800, gt=0)
    easing: str = "wheel_spin"

    # Geometry
    size: int = Field(default=380, gt=12)
    label_radius_ratio: float = Field(default=0.62, gt=0.0, le=1.0)

    # Status strings
    spinning_text: str = "Spinning..."
    winner_text: str = "Winner: {label}!"
    idle_text: str = "Ready to spin!"


class RoomSettings(BaseSettings):
    """Room Service connection settings."""

    api_base: str = "http://127.0.0.1:8000"
    room_id: str = "r1"
    timeout: float = Field(default=30.0, gt=0.0)


class SimulatorSettings(BaseSettings):
    """Preview window settings."""

    width: int = 900
    height: int = 560
    fps: int = 60
    fullscreen: bool = False
    title: str = "DRAWROOM"
    snapshot_dir: str = "snapshots"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DRAWROOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Nested settings
    wheel: WheelSettings = Field(default_factory=WheelSettings)
    room: RoomSettings = Field(default_factory=RoomSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with the preview window."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
