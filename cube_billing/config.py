"""Configuration management using Pydantic Settings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    rental_store_base: str = "http://localhost:8001"

    # Service
    service_name: str = "cube-billing"
    log_level: str = "INFO"

    # Billing
    billing_cycle_days: int = Field(14, gt=0)
    business_timezone: str = "Australia/Sydney"  # AEST/AEDT, all "today" snapshots use this

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
