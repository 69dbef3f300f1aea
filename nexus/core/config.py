from pydantic_settings import BaseSettings
from pydantic import field_validator


VALID_ENVIRONMENTS = ("development", "staging", "production", "testing")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Nexus Supervision"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty disables the rotating file handler

    # ==========================================
    # Remote API
    # ==========================================
    API_BASE_URL: str = "http://localhost:5000/api"
    REQUEST_TIMEOUT: int = 30  # seconds
    CONNECT_TIMEOUT: int = 10  # seconds

    # ==========================================
    # Supervision
    # ==========================================
    DEFAULT_CAPACITY_LIMIT: int = 5  # Used when the directory feed omits a limit
    STRICT_STATUS_VALIDATION: bool = False  # Raise on unknown project status strings
    NOTIFICATION_TTL_SECONDS: int = 4

    # ==========================================
    # AI Roadmap
    # ==========================================
    MIN_ROADMAP_DAYS: int = 7

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in VALID_ENVIRONMENTS:
            raise ValueError(f"ENVIRONMENT must be one of {', '.join(VALID_ENVIRONMENTS)}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return v

    @field_validator("DEFAULT_CAPACITY_LIMIT")
    @classmethod
    def validate_capacity_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("DEFAULT_CAPACITY_LIMIT must be positive")
        return v

    @property
    def api_base_url(self) -> str:
        """Base URL without a trailing slash"""
        return self.API_BASE_URL.rstrip('/')

    def is_dev_mode(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT == "development" or self.DEBUG

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
