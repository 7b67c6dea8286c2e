"""Console configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the organization console."""

    app_name: str = "Organization Console"
    debug: bool = True
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Session cookie: signed JWT wrapping the Drive access token
    secret_key: str = "change-me-in-prod"
    token_algorithm: str = "HS256"
    session_cookie_name: str = "console_session"
    session_expire_minutes: int = 60

    # Google OAuth client
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = "http://localhost:8000/api/auth/google/callback"
    google_auth_url: str = "https://accounts.google.com/o/oauth2/v2/auth"
    google_token_url: str = "https://oauth2.googleapis.com/token"
    google_scopes: list[str] = ["https://www.googleapis.com/auth/drive"]

    # Google Drive API
    drive_api_url: str = "https://www.googleapis.com/drive/v3"
    drive_timeout_seconds: float = 10.0
    drive_page_size: int = 100
    drive_share_public: bool = True  # grant "anyone with link" before returning a URL

    # Console client (File Table Controller -> Server Action Layer)
    console_api_url: str = "http://127.0.0.1:8000/api"
    copied_display_seconds: float = 2.0

    # Storage paths (relative resolved from project root at runtime)
    data_dir: str = "./data"
    log_dir: str = "./data/logs"
    database_path: str = "./data/orgconsole.db"
    folder_preference_path: str = "./data/preferences/selected_folder.json"

    uvicorn_workers: int = 1

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="ORGCONSOLE_",
        extra="ignore",
    )

    @field_validator("cors_origins", "google_scopes", mode="before")
    @classmethod
    def assemble_list(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure data paths are absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        for field in ("data_dir", "log_dir", "database_path", "folder_preference_path"):
            val = getattr(self, field)
            if not Path(val).is_absolute():
                setattr(self, field, str(base / val))
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
