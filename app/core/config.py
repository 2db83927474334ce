from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logger import get_logger

DEFAULT_MAX_ASSET_BYTES = 10 * 1024 * 1024

_NOTO_SANS_SC_REGULAR = (
    "https://fonts.gstatic.com/s/notosanssc/v37/"
    "k3kCo84MPvpLmixcA63oeAL7Iqp5IZJF9bmaG9_FnYxNbPzS5HE.woff2"
)
_NOTO_SANS_SC_BOLD = (
    "https://fonts.gstatic.com/s/notosanssc/v37/"
    "k3kXo84MPvpLmixcA63oeAL7Iqp5IZJF9bmaG9_EnYxNbPzS5HE.woff2"
)


class Settings(BaseSettings):
    """Process-wide configuration. Built once at startup and never mutated."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True, populate_by_name=True)

    DEBUG: bool = Field(False, alias="DEBUG")
    LOG_LEVEL: str = Field("INFO", alias="LOG_LEVEL")
    CORS_ORIGINS: str = Field("*", alias="CORS_ORIGINS")

    SIGNATURE_SECRET: str = Field("", alias="OG_SIGNATURE_SECRET")
    SIGNATURE_PROTECTION: bool = Field(
        False,
        validation_alias=AliasChoices("OG_SIGNATURE_PROTECTION", "NEXT_PUBLIC_OG_HAS_SIGNATURE_PROTECTION"),
    )
    PRIMARY_ROUTE_KEY: str = Field("og", alias="OG_PRIMARY_ROUTE_KEY")
    ALLOW_LEGACY_PATH: bool = Field(False, alias="OG_ALLOW_LEGACY_PATH")

    DEFAULT_THEME: str = Field("dark", alias="OG_DEFAULT_THEME")
    FONT_REGULAR_URL: str = Field(_NOTO_SANS_SC_REGULAR, alias="OG_FONT_REGULAR_URL")
    FONT_BOLD_URL: str = Field(_NOTO_SANS_SC_BOLD, alias="OG_FONT_BOLD_URL")
    FETCH_TIMEOUT_SECONDS: float = Field(15.0, alias="OG_FETCH_TIMEOUT_SECONDS")
    MAX_ASSET_BYTES: int = Field(DEFAULT_MAX_ASSET_BYTES, alias="OG_MAX_ASSET_BYTES", gt=0)
    # Checked on every request hop, redirects included. Literal IPs and
    # localhost only: DNS names are not resolved.
    BLOCK_PRIVATE_HOSTS: bool = Field(
        True,
        alias="OG_BLOCK_PRIVATE_HOSTS",
        description="Refuse asset fetches to localhost or literal private, loopback, link-local or reserved IPs. "
        "Hostnames are not resolved, so this is not full SSRF protection.",
    )
    CACHE_CONTROL: str = Field(
        "public, max-age=3600, s-maxage=86400, stale-while-revalidate=604800",
        alias="OG_CACHE_CONTROL",
    )

    @field_validator("PRIMARY_ROUTE_KEY")
    @classmethod
    def normalize_route_key(cls, value: str) -> str:
        key = (value or "").strip().strip("/")
        if not key:
            raise ValueError("OG_PRIMARY_ROUTE_KEY must not be empty")
        return key

    @field_validator("DEFAULT_THEME")
    @classmethod
    def normalize_default_theme(cls, value: str) -> str:
        return (value or "").strip().lower() or "dark"

    @model_validator(mode="after")
    def warn_missing_secret(self):
        if self.SIGNATURE_PROTECTION and not self.SIGNATURE_SECRET:
            logger = get_logger("settings")
            logger.warning("Signature protection is enabled but OG_SIGNATURE_SECRET is empty; all image requests will be rejected")
        return self

    @property
    def ALL_CORS_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def PRIMARY_ROUTE(self) -> str:
        return f"/api/{self.PRIMARY_ROUTE_KEY}"

    @property
    def SERVES_LEGACY_ROUTE(self) -> bool:
        return self.ALLOW_LEGACY_PATH and self.PRIMARY_ROUTE_KEY != "og"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
