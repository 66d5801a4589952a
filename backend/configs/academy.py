"""
Academy configuration settings.

Business defaults for the academy: local timezone, attendance window,
invoice and transaction defaults.

Dependencies: pydantic, pydantic_settings
System role: Domain defaults configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backend.configs.base import BaseSettings


class AcademySettings(BaseSettings):
    """Academy-wide business settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ACADEMY_",
        case_sensitive=False,
        extra="ignore",
    )

    name: str = Field(default="Academy", description="Academy display name")
    timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone used for 'today', attendance hours and monthly stats",
    )
    attendance_open_hour: int = Field(
        default=6,
        ge=0,
        le=23,
        description="First hour (inclusive) attendance can be registered",
    )
    attendance_close_hour: int = Field(
        default=23,
        ge=0,
        le=23,
        description="Last hour (inclusive) attendance can be registered",
    )
    default_invoice_due_day: int = Field(
        default=10,
        ge=1,
        le=31,
        description="Default due day for generated monthly invoices",
    )
    default_transaction_category: str = Field(
        default="Outros",
        description="Category applied to transactions created without one",
    )
    recent_activity_limit: int = Field(
        default=10,
        description="Number of recent attendances shown on the dashboard",
    )
