from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, Iterable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .gate import DEFAULT_EXCLUDED_PATH_PREFIXES, DEFAULT_PUBLIC_PATH_PREFIXES, GateConfig

# Temporary redirects only.
REDIRECT_STATUS_CODES = (302, 303, 307)


class GateSettings(BaseSettings):
    """Environment-driven gate configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Access Gate"

    AUTH_COOKIE_NAME: str = "auth-token"
    PUBLIC_PATH_PREFIXES: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_PUBLIC_PATH_PREFIXES)
    )
    EXCLUDED_PATH_PREFIXES: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_PATH_PREFIXES)
    )
    LOGIN_PATH: str = "/login"
    HOME_PATH: str = "/todos"
    REDIRECT_STATUS_CODE: int = 307

    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    @field_validator("PUBLIC_PATH_PREFIXES", "EXCLUDED_PATH_PREFIXES", mode="before")
    @classmethod
    def parse_prefix_list(cls, value: Any) -> list[str]:
        if value in (None, "", []):
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, Iterable):
            return [str(item).strip() for item in value if str(item).strip()]
        raise TypeError("path prefixes must be a comma separated string or list")

    @field_validator("REDIRECT_STATUS_CODE")
    @classmethod
    def check_redirect_status(cls, value: int) -> int:
        if value not in REDIRECT_STATUS_CODES:
            raise ValueError(f"REDIRECT_STATUS_CODE must be one of {REDIRECT_STATUS_CODES}")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    def gate_config(self) -> GateConfig:
        return GateConfig(
            public_path_prefixes=tuple(self.PUBLIC_PATH_PREFIXES),
            excluded_path_prefixes=tuple(self.EXCLUDED_PATH_PREFIXES),
            login_path=self.LOGIN_PATH,
            home_path=self.HOME_PATH,
            credential_cookie=self.AUTH_COOKIE_NAME,
        )


@lru_cache(maxsize=1)
def get_settings() -> GateSettings:
    return GateSettings()
