"""Configuration settings for the loan decision engine."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service identification
    service_name: str = "loan-decision-engine"

    # Observability
    log_level: str = "INFO"
    metrics_enabled: bool = True

    class Config:
        env_prefix = "LOAN_ENGINE_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
