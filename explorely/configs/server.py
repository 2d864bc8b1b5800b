"""
HTTP server configuration settings.

Dependencies: pydantic, pydantic_settings
System role: uvicorn bind address and CORS configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from explorely.configs.base import BaseSettings


class ServerSettings(BaseSettings):
    """uvicorn and CORS configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SERVER_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(
        default=5000,
        validation_alias=AliasChoices("SERVER_PORT", "PORT"),
        description="Bind port",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API with credentials",
    )
