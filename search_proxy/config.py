"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TomTomSettings(BaseModel):
    api_key: SecretStr | None = None
    base_url: AnyHttpUrl = Field(
        default="https://api.tomtom.com/search/2/search/",
        description="Fuzzy search endpoint; the encoded query is appended as `<query>.json`.",
    )
    country_set: str = Field(default="IN", min_length=2)
    radius_meters: int = Field(default=50_000, ge=1)
    language: str = Field(default="en-US", min_length=2)
    typeahead: bool = True
    request_timeout_seconds: float = Field(default=10, ge=1, le=60)
    max_attempts: int = Field(default=2, ge=1, le=5)
    retry_base_delay: float = Field(default=0.2, ge=0)

    @field_validator("api_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class QueryDefaults(BaseModel):
    # Bengaluru city centre
    lat: str = "12.9716"
    lon: str = "77.5946"
    limit: str = "5"


class ProxySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEARCH_PROXY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        populate_by_name=True,
        extra="ignore",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"
    cache_max_age_seconds: int = Field(default=300, ge=0)

    tomtom: TomTomSettings = Field(default_factory=TomTomSettings)
    defaults: QueryDefaults = Field(default_factory=QueryDefaults)

    # Key names used by the static frontend build.
    legacy_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("VITE_TOMTOM_API_KEY", "TOMTOM_API_KEY"),
        exclude=True,
    )

    def api_key(self) -> str | None:
        """Return the TomTom credential, preferring the prefixed setting."""

        for secret in (self.tomtom.api_key, self.legacy_api_key):
            if secret is None:
                continue
            value = secret.get_secret_value().strip()
            if value:
                return value
        return None


@lru_cache
def get_settings() -> ProxySettings:
    """Return cached settings instance."""

    return ProxySettings()


__all__ = [
    "ProxySettings",
    "QueryDefaults",
    "TomTomSettings",
    "get_settings",
]
