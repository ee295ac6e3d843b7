from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database - SQLite for development, PostgreSQL in deployment
    database_url: str = "sqlite:///./ats.db"
    database_echo: bool = False

    # Application
    app_name: str = "Applicant Tracking API"
    debug: bool = False
    log_level: str = "INFO"
    logs_dir: Path = Path("logs")

    # Tokens
    jwt_secret_key: str = Field("change-me-in-production-with-a-long-random-value", min_length=32)
    jwt_algorithm: str = "HS256"
    access_token_expire_seconds: int = 60 * 60  # 1 hour
    refresh_token_expire_seconds: int = 60 * 60 * 24 * 5  # 5 days
    auth_cookie_name: str = "Authorization"
    xsrf_header_name: str = "x-xsrf-token"

    # Passwords
    bcrypt_rounds: int = 10

    # Pagination
    default_per_page: int = 20
    max_per_page: int = 100

    # CORS; credentialed requests need explicit origins
    cors_origins: list[str] = ["http://localhost:3000"]

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        if not v:
            raise ValueError("DATABASE_URL must be set")
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
