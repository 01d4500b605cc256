from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Guest Desk"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"

    # ─────────── DATABASE ───────────
    database_url: str

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 720  # 12 hours, one event night

    # ─────────── GUEST SUBMISSIONS ───────────
    max_guest_name_length: int = 100
    max_guests_per_submission_internal: int = 50

    # ─────────── LISTING ───────────
    default_page_size: int = 20
    max_page_size: int = 100

    # ─────────── SEED ───────────
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None
    bootstrap_admin_name: str = "Administrador"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
