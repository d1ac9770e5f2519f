from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .auth import AuthConfig
from .database import DatabaseConfig
from .logger import LoggerConfig


class SheetShareConfig(BaseSettings):
    """Root configuration.

    Every value can be overridden from the environment, e.g.
    ``SHEETSHARE_DATABASE_ENGINE=sqlite`` or ``SHEETSHARE_AUTH_JWTSECRET=...``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEETSHARE_",
        env_nested_delimiter="_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    Host: str = Field(default="0.0.0.0", description="Bind host")
    Port: int = Field(default=48196, description="Bind port")
    Debug: bool = Field(default=False, description="Enable auto reload and debug logging")

    Database: DatabaseConfig = Field(default_factory=lambda: DatabaseConfig(), description="Database configuration")
    Auth: AuthConfig = Field(default_factory=lambda: AuthConfig(), description="Credential verification")
    Logger: LoggerConfig = Field(default_factory=lambda: LoggerConfig(), description="Logging configuration")


configs = SheetShareConfig()

__all__ = ["configs", "SheetShareConfig"]
