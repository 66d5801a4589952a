"""
Authentication configuration settings.

Token signing and password hashing parameters for the identity boundary.

Dependencies: pydantic, pydantic_settings
System role: Identity provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backend.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """Access token and password hashing configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    secret_key: str = Field(
        default="change-me-in-production",
        description="HMAC secret used to sign access tokens",
    )
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60 * 12,
        description="Access token lifetime in minutes",
    )
    issuer: str = Field(default="academy-manager", description="JWT issuer claim")
    bcrypt_rounds: int = Field(default=12, description="bcrypt cost factor")
    min_password_length: int = Field(default=6, description="Minimum password length")
