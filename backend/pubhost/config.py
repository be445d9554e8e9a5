"""pubhost configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "pubhost"
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

    # Admin session
    secret_key: str = "change-me-in-prod"
    token_algorithm: str = "HS256"
    session_expire_minutes: int = 1440  # 24 hours
    session_cookie_name: str = "pub_session"
    admin_password: str = ""

    # Mode: dev = in-memory store, prod = blob store
    mode: str = "dev"

    # Blob store
    blob_api_url: str = "https://blob.vercel-storage.com"
    blob_token: str = ""
    store_timeout_seconds: float = 10.0

    # Public view responses
    view_cache_max_age: int = 3600

    uvicorn_workers: int = 1

    @property
    def is_dev_mode(self) -> bool:
        return self.mode == "dev"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="PUBHOST_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:3000"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
