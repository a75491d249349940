"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./deals.db"

    # App settings
    app_name: str = "Deal Analyzer"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Narrative insights (OpenAI); empty key disables the service
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 800

    # Default long-term assumptions (percentages)
    default_projection_years: int = 10
    default_annual_rent_increase: float = 3.0
    default_annual_expense_increase: float = 2.0
    default_annual_property_value_increase: float = 3.0
    default_selling_costs: float = 6.0
    default_vacancy_rate: float = 5.0
    default_turnover_frequency: float = 2.0

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
