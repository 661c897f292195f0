"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "obligation-engine"
    log_level: str = "INFO"

    # Alerting
    suspicious_activity_threshold: float = 1000.0  # Expenses above this are flagged

    # Loans
    loan_due_soon_days: int = 7  # Portfolio "due soon" window


settings = Settings()
