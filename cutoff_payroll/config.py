"""
Application Configuration
Loads and validates environment variables
"""
from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Cutoff Payroll Engine"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    CORS_ALLOW_CREDENTIALS: bool = True

    # Wall-clock zone for timezone-aware punch instants
    TIMEZONE: str = "Asia/Manila"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    # Attendance (HH:MM, local time of the punch)
    SHIFT_START: str = "07:00"
    SHIFT_END: str = "17:30"
    LUNCH_START: str = "12:00"
    LUNCH_END: str = "13:00"
    EARLIEST_TIME_IN: str = "06:00"
    EARLIEST_TIME_OUT: str = "07:00"
    HALF_DAY_LATEST_OUT: str = "13:59"
    TARDINESS_GRACE_END: str = "08:00"
    FULL_DAY_HOURS: float = 8.0
    HALF_DAY_HOURS: float = 4.0

    # Statutory deductions (flat, per cutoff)
    SSS_DEDUCTION: float = 425.0
    PAGIBIG_DEDUCTION: float = 100.0
    PHILHEALTH_DEDUCTION: float = 212.5

    # Base pay
    OWNER_CUTOFF_PAY: float = 60000.0
    DEFAULT_INTERN_DAILY: float = 125.0
    PROBATIONARY_WORKING_DAYS: int = 22

    # Official business (per instance)
    OB_RATE_INTERN: float = 500.0
    OB_RATE_VIDEOGRAPHER: float = 2500.0
    OB_RATE_TALENT: float = 2000.0
    OB_RATE_ASSISTED: float = 1500.0
    DEFAULT_OB_REQUEST_RATE: float = 1500.0

    # Premium multipliers on the hourly OT rate
    NIGHT_DIFF_MULTIPLIER: float = 1.1
    RDOT_MULTIPLIER: float = 1.3
    HOLIDAY_30_MULTIPLIER: float = 0.3
    HOLIDAY_DOUBLE_MULTIPLIER: float = 2.0
    HOLIDAY_OT_DOUBLE_MULTIPLIER: float = 2.6

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS origins string to list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
