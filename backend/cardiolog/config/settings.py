"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "CardioLog"
    app_version: str = "1.0.0"
    debug: bool = False  # enables /debug routes and the hourly cache file

    # Storage
    local_storage_path: str = "./data"

    # Heart-rate pipeline
    timezone: Optional[str] = None  # IANA name, host local time when unset
    locale: str = "en"  # en or zh, used for chart labels
    merge_policy: str = "append"  # "append" or "replace"
    latest_days_default: int = 30

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "capacitor://localhost",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/cardiolog.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


settings = Settings()
