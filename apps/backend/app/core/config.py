"""
Application configuration loaded from environment variables.

Uses pydantic-settings for type-safe env var parsing with automatic
.env file loading.

To extend: add new fields here and document them in .env.example.
See https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── Core ──────────────────────────────────────────────────────
    environment: str = "development"
    debug: bool = False

    # ─── MongoDB ───────────────────────────────────────────────────
    # Local dev default matches a plain `mongod` on the default port.
    mongo_uri: str = "mongodb://localhost:27017/soundrecorder"
    mongo_db_name: str = "soundrecorder"
    recordings_collection: str = "recordings"

    # ─── CORS ──────────────────────────────────────────────────────
    # Comma-separated allowed origins for the recorder web app.
    cors_origins_str: str = "http://localhost:3000,http://localhost:3001"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_str.split(",") if o.strip()]

    # ─── Location catalog ──────────────────────────────────────────
    # Optional path to a JSON list of {id, name, description, lat, lng}.
    # Empty → use the built-in campus table in app/core/catalog.py.
    catalog_path: str = ""
    # Include the "AT LARGE" pseudo-location (recordings made anywhere).
    catalog_include_at_large: bool = True

    # ─── Recordings ────────────────────────────────────────────────
    recordings_rate_limit: str = "30/minute"
    # Prefix used to derive audioUrl for legacy entries that only store a filename.
    audio_url_prefix: str = "/recordings"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Don't fail on unknown env vars
    )


# Module-level singleton — import this everywhere instead of instantiating Settings()
settings = Settings()
