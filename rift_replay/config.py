"""
Configuration management using Pydantic Settings.
Replay tuning knobs are loaded from environment variables (or a .env file).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Timeline assembly
    chunk_size: int = Field(
        1000,
        gt=0,
        description="Lines (and frames) processed between cooperative yields",
        alias="RIFT_CHUNK_SIZE",
    )

    cache_window_size: int = Field(
        100,
        gt=0,
        description="Width in seconds of the sliding frame/dominance cache window",
        alias="RIFT_CACHE_WINDOW_SIZE",
    )

    kill_display_seconds: int = Field(
        3,
        ge=0,
        description="How long a kill stays in a frame's recent kills",
        alias="RIFT_KILL_DISPLAY_SECONDS",
    )

    # Dominance field
    dominance_resolution: int = Field(
        100,
        ge=2,
        description="Samples per axis of the dominance grid",
        alias="RIFT_DOMINANCE_RESOLUTION",
    )

    champion_vision_range: float = Field(
        1400.0, gt=0, description="Champion aura radius in world units",
        alias="RIFT_CHAMPION_VISION_RANGE",
    )

    ward_vision_range: float = Field(
        900.0, gt=0, description="Ward aura radius in world units", alias="RIFT_WARD_VISION_RANGE"
    )

    map_span: float = Field(
        14820.0, gt=0, description="World units spanned by the map", alias="RIFT_MAP_SPAN"
    )

    zone_grid_size: int = Field(
        3, ge=1, description="Rows/columns of the coarse zone summary", alias="RIFT_ZONE_GRID_SIZE"
    )

    # Invasion geometry
    invasion_threshold: float = Field(
        1.0,
        description="Invasion depth past which a unit counts as invading",
        alias="RIFT_INVASION_THRESHOLD",
    )

    invasion_join_distance: float = Field(
        0.2,
        gt=0,
        description="Normalized distance under which invaders join the same group",
        alias="RIFT_INVASION_JOIN_DISTANCE",
    )

    # Runtime
    log_level: str = Field("INFO", description="Logging level", alias="LOG_LEVEL")

    app_env: str = Field("development", alias="APP_ENV")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
