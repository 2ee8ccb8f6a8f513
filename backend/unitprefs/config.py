from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="UNITPREFS_")

    app_name: str = "Unit Preferences"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    default_display_format: str = "0.0"
    local_timezone: str | None = None  # IANA name; unset = host zone
    metadata_cache_enabled: bool = True


settings = Settings()
