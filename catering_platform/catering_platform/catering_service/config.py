"""
Configuration management for the catering service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Catering service configuration loaded from environment variables"""

    # Application
    APP_ENV: str = "production"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "./logs"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./catering.db"
    DB_ECHO: bool = False

    # JWT
    JWT_SECRET_KEY: str = "change-this-secret-in-prod"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "catering-service"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Operator account
    AUTH_USERNAME: str = "admin"
    AUTH_PASSWORD: str = "admin"
    AUTH_PASSWORD_HASH: Optional[str] = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Pagination
    DEFAULT_PER_PAGE: int = 10
    MAX_PER_PAGE: int = 100

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"


# Global settings instance
settings = Settings()
