"""Application configuration"""

import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_INTERNAL_API_KEY = "change-me-internal-key"


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="OAUTH_SERVER__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"
    port: int = 8003

    # Database
    db_url: str = "sqlite:///oauth_server.db"

    # Authorization codes
    authorization_code_lifetime: int = 600  # 10 minutes
    authorization_code_bytes: int = 16

    # Access tokens
    access_token_lifetime: int = 3600  # 1 hour
    access_token_bytes: int = 32

    # Where the authorize endpoint sends the user agent when the client is unknown
    authorize_error_url: str = ""

    # Shared key for the login UI calling the internal code issuance endpoint
    internal_api_key: str = DEFAULT_INTERNAL_API_KEY

    # Client secret hashing
    bcrypt_rounds: int = 12

    # Logging
    log_level: str = "INFO"

    # Version
    version: str = "0.1.0"

    @field_validator("authorization_code_lifetime", "access_token_lifetime")
    @classmethod
    def validate_lifetime(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("lifetime must be a positive number of seconds")
        return v

    @field_validator("authorization_code_bytes")
    @classmethod
    def validate_code_entropy(cls, v: int) -> int:
        if v < 16:
            raise ValueError("authorization codes need at least 16 random bytes")
        return v

    @field_validator("access_token_bytes")
    @classmethod
    def validate_token_entropy(cls, v: int) -> int:
        if v < 32:
            raise ValueError("access tokens need at least 32 random bytes")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def validate_internal_api_key(self) -> "Settings":
        if self.is_production and self.internal_api_key == DEFAULT_INTERNAL_API_KEY:
            raise ValueError("internal_api_key must be changed from the default in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.environment.lower() == "development"


# Create settings instance
settings = Settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger("oauth-server")
