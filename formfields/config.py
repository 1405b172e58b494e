"""Runtime settings for form fields."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class FieldSettings(BaseSettings):
    """Settings read from ``FORMFIELDS_*`` environment variables."""

    # Numbers
    default_locale: str = "en_US"

    # Display
    none_marker: str = "(none)"

    # Legacy comma-delimited values
    legacy_comma_token: str = "{comma}"

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="FORMFIELDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> FieldSettings:
    return FieldSettings()
