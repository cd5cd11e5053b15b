"""
Converter settings using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConverterSettings(BaseSettings):
    """Form defaults and display configuration."""

    display_locale: str = Field(
        default="en_US", description="Locale used to format money amounts"
    )
    default_from_currency: str = Field(
        default="USD", description="Source currency selected after catalog load"
    )
    default_to_currency: str = Field(
        default="EUR", description="Target currency selected after catalog load"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


converter_settings = ConverterSettings()
