"""
Application Configuration for PinMap Backend
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Get the project root directory (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database Configuration
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_NAME: str = "pinmap"
    DATABASE_USERNAME: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"  # Default for development
    DATABASE_URL_OVERRIDE: Optional[str] = None
    DATABASE_CONNECT_RETRY_SECONDS: float = 5.0

    @property
    def DATABASE_URL(self) -> str:
        """Full database URL (explicit override wins over the components)"""
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (
            f"postgresql://{self.DATABASE_USERNAME}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    # JWT Configuration (tokens are issued elsewhere, we only verify them)
    JWT_SECRET_KEY: str = "dev-secret-key-change-in-production"  # Default for development
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "PinMap API"
    DEBUG: bool = True

    # CORS Configuration
    ALLOWED_ORIGINS: str = "*"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from string"""
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Sharing
    SHARE_DEFAULT_CATEGORY: str = "Default"
    PUBLIC_PINS_LIMIT: int = 50
    USER_SEARCH_LIMIT: int = 20

    # Environment
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


# Global settings instance
settings = Settings()
