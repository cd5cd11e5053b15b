"""
Settings for the conversion form HTTP service.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """Where the form service listens and how it starts up."""

    api_host: str = Field(
        default="0.0.0.0", description="Interface the form service binds to"
    )
    api_port: int = Field(default=8000, description="Port the form service binds to")
    log_level: str = Field(default="INFO", description="Uvicorn log level")
    load_catalog_on_startup: bool = Field(
        default=True,
        description="Fetch the currency list before serving the first request",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


api_settings = APISettings()
