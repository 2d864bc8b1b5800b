"""
Notification configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Delivery page sizes and retention for notifications
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from explorely.configs.base import BaseSettings


class NotificationSettings(BaseSettings):
    """Notification delivery and retention configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NOTIFICATIONS_",
        case_sensitive=False,
        extra="ignore",
    )

    recent_limit: int = Field(default=5, description="Items returned by the dropdown endpoint")
    page_size: int = Field(default=20, description="Items per history page")
    dedup_window_hours: int = Field(
        default=24,
        description="Identical notifications inside this window are not written twice",
    )
    retention_days: int = Field(
        default=90,
        description="Notifications older than this are purged by maintenance",
    )
