from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthConfig(BaseSettings):
    """Bearer credential verification settings.

    Tokens are issued by the sign-in service; this service only verifies them.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="_",
        case_sensitive=False,
        extra="ignore",
    )

    JwtSecret: str = Field(default="your-secret-key", description="Shared HMAC secret used to verify tokens")
    JwtAlgorithm: str = Field(default="HS256", description="JWT signing algorithm")
