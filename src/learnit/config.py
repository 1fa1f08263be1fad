"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from environment variables with LEARNIT_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="LEARNIT_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "console"

    # --- Backend API ---
    api_base_url: str = "http://localhost:5000/api"
    api_timeout_seconds: float = 10.0

    # --- Transient UI events ---
    xp_popup_ttl_ms: int = 2000
    badge_toast_ttl_ms: int = 4000

    # --- Notifications ---
    notification_poll_interval_seconds: float = 30.0
    notification_panel_limit: int = 10

    # --- Badge grids ---
    badge_grid_min_slots: int = 8


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
