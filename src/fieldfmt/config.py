"""Configuration management for fieldfmt.

Loads settings from environment variables or a .env file. Only the
ambient conventions live here (the locale used by the ``default``
separator style and the zone used for non-UTC temporal rendering);
everything else is passed explicitly to the formatting functions.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from babel import Locale, UnknownLocaleError, default_locale
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldfmt.exceptions import ConfigurationError

FALLBACK_LOCALE = "en_US"


class FieldFmtSettings(BaseSettings):
    """Application settings loaded from environment variables and .env files.

    Priority (highest to lowest):
      1. Explicit constructor arguments
      2. Environment variables (FIELDFMT_LOCALE, FIELDFMT_TIMEZONE, ...)
      3. .env file in current directory
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    fieldfmt_locale: Annotated[
        str, Field(description="Locale for the default separator style, e.g. en_US or de_DE")
    ] = ""

    fieldfmt_timezone: Annotated[
        str, Field(description="IANA zone for non-UTC dates; empty means the system zone")
    ] = ""

    fieldfmt_convert_to_utc: Annotated[
        bool, Field(description="Default for the CLI --utc flag")
    ] = False

    @field_validator("fieldfmt_locale")
    @classmethod
    def normalize_locale(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return v
        # Accept POSIX-style values such as "de_DE.UTF-8" or "en-GB"
        v = v.split(".")[0].replace("-", "_")
        try:
            Locale.parse(v)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"Unknown locale '{v}'") from e
        return v

    @field_validator("fieldfmt_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone '{v}'") from e
        return v

    @property
    def locale(self) -> str:
        """Locale identifier used when no separator style is forced."""
        if self.fieldfmt_locale:
            return self.fieldfmt_locale
        system = default_locale("LC_NUMERIC")
        # The C/POSIX locale maps to en_US_POSIX, which has no digit grouping
        if system and system != "en_US_POSIX":
            try:
                Locale.parse(system)
                return system
            except (UnknownLocaleError, ValueError):
                pass
        return FALLBACK_LOCALE

    @property
    def tzinfo(self) -> tzinfo | None:
        """Ambient zone, or None for the system local zone."""
        if not self.fieldfmt_timezone:
            return None
        return ZoneInfo(self.fieldfmt_timezone)


# Singleton-ish: lazily loaded on first access
_settings: FieldFmtSettings | None = None


def get_settings(**overrides: str) -> FieldFmtSettings:
    """Get or create the application settings singleton."""
    global _settings
    if _settings is None or overrides:
        try:
            _settings = FieldFmtSettings(**overrides)
        except ValidationError as e:
            details = "; ".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors())
            raise ConfigurationError(f"Invalid settings: {details}") from e
    return _settings


def reset_settings() -> None:
    """Reset cached settings (useful for testing)."""
    global _settings
    _settings = None
