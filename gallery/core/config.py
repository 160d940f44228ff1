from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Iterable

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .routing import GateConfig


def _split_csv(value: Any, name: str) -> list[str]:
    if value in (None, "", []):
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, Iterable):
        return [str(item).strip() for item in value if str(item).strip()]
    raise TypeError(f"{name} must be a comma separated string or list")


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Project Gallery"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2] / "data")
    DB_URL: str = Field(default="", validation_alias=AliasChoices("DB_URL", "DATABASE_URL"))

    SESSION_COOKIE_NAME: str = "augment_session"
    SESSION_TTL_DAYS: int = 30
    SESSION_COOKIE_SECURE: bool = False

    # Admission gate. Pages listed here are public together with everything nested below them.
    GATE_API_PREFIX: str = "/api/"
    GATE_ASSET_PREFIX: str = "/static/"
    GATE_FAVICON_PREFIX: str = "/favicon"
    GATE_PUBLIC_PAGES: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["/projects"])
    GATE_LOGIN_PATH: str = "/login"
    GATE_SPECIAL_ACCESS_PATH: str = "/a-access"

    ADMIN_EMAIL: str = "admin@augmentcode.in"
    ADMIN_PASSWORD: str = ""
    ADMIN_PASSWORD_HASH: str = ""  # e.g. $2b$12$...

    ALLOWED_ORIGINS: Annotated[list[str], NoDecode] = Field(default_factory=list)

    @property
    def session_max_age(self) -> int:
        return self.SESSION_TTL_DAYS * 24 * 60 * 60

    def gate_config(self) -> GateConfig:
        return GateConfig(
            api_prefix=self.GATE_API_PREFIX,
            asset_prefix=self.GATE_ASSET_PREFIX,
            favicon_prefix=self.GATE_FAVICON_PREFIX,
            public_pages=frozenset(self.GATE_PUBLIC_PAGES),
            login_path=self.GATE_LOGIN_PATH,
            special_access_path=self.GATE_SPECIAL_ACCESS_PATH,
            cookie_name=self.SESSION_COOKIE_NAME,
        )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_allowed_origins(cls, value: Any) -> list[str]:
        return _split_csv(value, "ALLOWED_ORIGINS")

    @field_validator("GATE_PUBLIC_PAGES", mode="before")
    @classmethod
    def parse_public_pages(cls, value: Any) -> list[str]:
        return [page.rstrip("/") or "/" for page in _split_csv(value, "GATE_PUBLIC_PAGES")]


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    settings = AppSettings()
    settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
    if not settings.DB_URL:
        settings.DB_URL = f"sqlite:///{settings.DATA_DIR / 'gallery.db'}"
    return settings


settings = get_settings()
