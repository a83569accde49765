"""
Application configuration using Pydantic Settings
"""
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Clinic Admin API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./healthcare.db", description="Database connection string")
    DATABASE_ECHO: bool = False
    SQLITE_WAL: bool = True
    SQLITE_BUSY_TIMEOUT_SECONDS: float = 5.0

    # JWT Configuration
    JWT_SECRET_KEY: str = Field(default="development-secret-key-please-change-in-production-min-32-characters", min_length=32, description="Secret key for JWT signing")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Security
    PASSWORD_MIN_LENGTH: int = 8
    BCRYPT_ROUNDS: int = 10

    # CORS Settings
    CORS_ORIGINS: str = "http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as list"""
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        # Handle wildcard for development
        if "*" in origins:
            return ["*"]
        return origins


# Global settings instance
settings = Settings()
