"""
Exchange-rate client settings using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RatesClientSettings(BaseSettings):
    """Exchange-rate service client configuration using Pydantic settings."""

    rates_api_url: str = Field(
        default="https://api.frankfurter.app",
        description="Exchange-rate service base URL",
    )

    request_timeout: float = Field(
        default=10,
        gt=0,
        description="Total timeout in seconds for a single service request",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create a global instance
rates_client_settings = RatesClientSettings()
