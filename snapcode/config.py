# FILE: snapcode/config.py
"""
Configuration management for snapcode
Loads from environment variables with validation
"""
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Upper bound on automatic repair rounds per generation request
MAX_REPAIR_ATTEMPTS = 1


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )

    # Backend server
    backend_host: str = Field(default="0.0.0.0", alias="BACKEND_HOST")
    backend_port: int = Field(default=8000, alias="BACKEND_PORT")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Gemini
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    gemini_describe_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_DESCRIBE_MODEL")
    gemini_api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1",
        alias="GEMINI_API_BASE_URL"
    )
    model_timeout_seconds: int = Field(default=120, alias="MODEL_TIMEOUT_SECONDS")

    # Generation pipeline
    describe_on_upload: bool = Field(
        default=True,
        alias="DESCRIBE_ON_UPLOAD",
        description="Ask the model for a textual description of each uploaded image"
    )
    repair_attempts: int = Field(
        default=1,
        alias="REPAIR_ATTEMPTS",
        description="Automatic repair rounds when generated code looks broken (0 disables)"
    )

    # Ephemeral image store
    image_store_max_entries: int = Field(default=256, alias="IMAGE_STORE_MAX_ENTRIES")
    image_store_ttl_seconds: int = Field(default=3600, alias="IMAGE_STORE_TTL_SECONDS")

    # Debug log of recent model calls
    provider_io_log_size: int = Field(default=100, alias="PROVIDER_IO_LOG_SIZE")

    # Security
    upload_size_limit_mb: int = Field(default=20, alias="UPLOAD_SIZE_LIMIT_MB")

    # CORS
    cors_origins: List[str] = Field(default=["http://localhost:3000"], alias="CORS_ORIGINS")

    # Validators
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return v

    @field_validator("repair_attempts")
    @classmethod
    def validate_repair_attempts(cls, v):
        if not 0 <= v <= MAX_REPAIR_ATTEMPTS:
            raise ValueError(f"repair_attempts must be between 0 and {MAX_REPAIR_ATTEMPTS}")
        return v

    @field_validator("image_store_max_entries", "image_store_ttl_seconds", "provider_io_log_size")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("model_timeout_seconds")
    @classmethod
    def validate_model_timeout(cls, v):
        if v < 5:
            raise ValueError("model_timeout_seconds must be at least 5 seconds")
        if v > 600:
            raise ValueError("model_timeout_seconds should not exceed 600 seconds")
        return v


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create singleton settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings (useful for testing)"""
    global _settings
    _settings = None
    return get_settings()
