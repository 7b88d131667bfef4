"""
Application configuration for the salon back office.

Values are read from the environment (or a local ``.env`` file) so that
deployments never need code changes to point at a different database or
tune the payroll batch.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Database Configuration
    database_url: str = "sqlite:///./salon.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    log_sql_queries: bool = False

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Payroll Configuration
    payroll_batch_max_workers: int = 4
    payroll_currency: str = "MMK"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


settings = get_settings()
