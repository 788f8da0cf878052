"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Remote scoring service
    backend_url: str = "http://localhost:8000"

    # Service
    service_name: str = "loan-recovery-dashboard"
    log_level: str = "INFO"

    # HTTP Client (None disables the timeout)
    http_timeout_seconds: float | None = None


settings = Settings()
