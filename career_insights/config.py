"""
Configuration management for the Career Insights service
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Career Insights Service"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_workers: int = 4

    # Database
    database_url: str = "sqlite:///./career_insights.db"

    # Identity (set by the upstream identity provider / gateway)
    identity_header: str = "X-User-Id"

    # LLM Configuration
    anthropic_api_key: Optional[str] = None
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 2000
    llm_timeout_seconds: float = 60.0

    # ATS scoring uses its own model so it can be tuned independently
    ats_model: str = "claude-sonnet-4-20250514"
    ats_max_tokens: int = 1500

    # Reconciliation (profile update + insight upsert)
    reconcile_timeout_seconds: float = 15.0
    default_redirect: str = "/dashboard"

    # Insight refresh job
    insight_refresh_schedule: str = "0 0 * * sun"  # Sundays at midnight
    insight_refresh_timezone: str = "UTC"
    insight_refresh_batch_size: int = 500  # 0 = no limit
    insight_refresh_concurrency: int = 1
    insight_refresh_max_attempts: int = 2
    enable_scheduler: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
