"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "installment-advisor"
    log_level: str = "INFO"

    # Reference rates (Banco Central do Brasil SGS open data)
    rates_api_base: str = "https://api.bcb.gov.br"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    rate_fetch_max_attempts: int = 2  # first try + one retry
    rate_fetch_backoff_base: float = 0.5  # Exponential backoff base in seconds

    # Rendering
    money_places: int = 2
    rate_places: int = 6


settings = Settings()
