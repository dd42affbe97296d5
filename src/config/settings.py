"""Application settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    # Distribution inputs
    alternate_domain_names_raw: str | None = Field(
        default=None, validation_alias="ALTERNATE_DOMAIN_NAMES"
    )
    certificate_name: str | None = Field(
        default=None, validation_alias="CERTIFICATE_NAME"
    )
    distribution_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DISTRIBUTION_ID", "CLOUDFRONT_DISTRIBUTION_ID"),
    )

    # Origin source (exactly one required)
    s3_bucket: str | None = Field(default=None, validation_alias="AWS_BUCKET")
    origin_domain_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ORIGIN_DOMAIN_NAME", "CF_ORIGIN_DOMAIN_NAME"),
    )

    # Extra cache behaviors
    cache_rules_path: str = Field(
        default="caching.config.json", validation_alias="CACHE_RULES_PATH"
    )

    # AWS configuration
    aws_region: str = Field(default="us-east-1", validation_alias="CLOUDFRONT_REGION")

    # Feature flags
    debug: bool = Field(default=False, validation_alias="DEBUG")
    dry_run: bool = Field(default=False, validation_alias="DRY_RUN")

    @field_validator(
        "alternate_domain_names_raw",
        "certificate_name",
        "distribution_id",
        "s3_bucket",
        "origin_domain_name",
        mode="before",
    )
    @classmethod
    def _blank_is_unset(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @property
    def alternate_domain_names(self) -> list[str]:
        """Get aliases as a list, trimmed and without empty entries."""
        if not self.alternate_domain_names_raw:
            return []
        return [
            name.strip()
            for name in self.alternate_domain_names_raw.split(",")
            if name.strip()
        ]

    @property
    def cache_rules_file(self) -> Path:
        """Get cache rules path as Path object."""
        return Path(self.cache_rules_path)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
