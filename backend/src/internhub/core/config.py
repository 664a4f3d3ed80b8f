"""
Configuration Management
Pydantic Settings with strict validation
"""
from typing import List
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with strict validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "InternHub Placement API"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development")

    # Database (embedded SQLite by default, any async SQLAlchemy URL works)
    DATABASE_URL: str = "sqlite+aiosqlite:///./internhub.db"

    # Posting rules
    MAX_POSTINGS_PER_REPRESENTATIVE: int = Field(default=5, ge=1)
    MIN_SLOTS: int = Field(default=1, ge=1)
    MAX_SLOTS: int = Field(default=10, ge=1)

    # Application rules
    MAX_ACTIVE_APPLICATIONS_PER_STUDENT: int = Field(default=3, ge=1)
    SENIOR_LEVEL_MIN_YEAR: int = Field(
        default=3,
        description="Lowest year of study allowed to apply for Intermediate/Advanced postings"
    )

    # Identifier counters (internship and application ids never overlap)
    INTERNSHIP_ID_START: int = 100000
    APPLICATION_ID_START: int = 500000

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON_FORMAT: bool = False
    LOG_DIR: str = "logs"

    # CORS
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name"""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def validate_bounds(self) -> "Settings":
        """Slot bounds and id ranges must be consistent"""
        if self.MIN_SLOTS > self.MAX_SLOTS:
            raise ValueError("MIN_SLOTS cannot exceed MAX_SLOTS")
        if self.INTERNSHIP_ID_START == self.APPLICATION_ID_START:
            raise ValueError("Internship and application id counters must start apart")
        return self


# Global settings instance
settings = Settings()
