"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups use a double underscore, e.g. ``LIGHTFIELD_BOARD__ROWS=10``.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lightfield.graphics.palette import merge_colors


class WindowSettings(BaseModel):
    """Simulator window settings."""

    width: int = Field(default=1280, gt=0)
    height: int = Field(default=720, gt=0)
    fps: int = Field(default=60, gt=0)
    title: str = "LIGHTFIELD Simulator"
    device_pixel_ratio: float = Field(default=1.0, gt=0.0)
    background: tuple[int, int, int] = (10, 10, 12)


class FieldSettings(BaseModel):
    """Background dot field settings."""

    spacing: float = Field(default=14.0, gt=0.0)
    time_step: float = 0.003
    base_opacity: float = Field(default=0.06, ge=0.0, le=1.0)
    opacity_range: float = Field(default=0.08, ge=0.0, le=1.0)
    smoothing: float = Field(default=0.06, gt=0.0, le=1.0)
    flow_strength: float = 6.0
    dot_radius: float = Field(default=1.0, gt=0.0)
    color: tuple[int, int, int] = (255, 255, 255)


class BoardSettings(BaseModel):
    """Scrolling light board settings."""

    text: str = "LIGHTFIELD"
    rows: int = Field(default=5, ge=1)
    light_size: float = Field(default=4.0, gt=0.0)
    gap: float = Field(default=1.0, ge=0.0)

    # Milliseconds between scroll steps; None scrolls once per frame
    update_interval: Optional[float] = Field(default=10.0, ge=0.0)

    font: Literal["default", "compact-numeral", "7segment"] = "default"
    colors: dict[str, str] = Field(default_factory=dict)
    disable_drawing: bool = True
    pause_on_hover: bool = True
    min_spacing: int = Field(default=3, ge=1)

    @field_validator("colors")
    @classmethod
    def _check_colors(cls, value: dict[str, str]) -> dict[str, str]:
        merge_colors(value)
        return value


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="LIGHTFIELD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Nested settings
    window: WindowSettings = Field(default_factory=WindowSettings)
    dot_field: FieldSettings = Field(default_factory=FieldSettings)
    board: BoardSettings = Field(default_factory=BoardSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
