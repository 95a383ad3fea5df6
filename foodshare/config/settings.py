"""
Application settings and configuration
"""
from decimal import Decimal
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Basic app settings
    DEBUG: bool = Field(default=False)
    APP_NAME: str = Field(default="Foodshare Donation Service")

    # Server settings
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])
    API_PREFIX: str = Field(default="/api")

    # Store settings (in-memory, nothing survives a restart)
    DATABASE_URL: str = Field(default="sqlite://")

    # Tenant settings
    DEFAULT_BUSINESS_ID: str = Field(default="demo-business-1")
    SEED_DEMO_DATA: bool = Field(default=True)

    # Donation settings
    DEFAULT_FISCAL_POLICY: str = Field(default="full_value")  # full_value | tax_benefit
    TAX_BENEFIT_RATE: Decimal = Field(default=Decimal("0.60"))

    # Dashboard settings
    EXPIRING_WITHIN_DAYS: int = Field(default=2)
    LOW_STOCK_THRESHOLD: int = Field(default=5)
    PEOPLE_PER_UNIT: float = Field(default=1.5)

    # Schedule settings
    SCHEDULE_DEFAULT_IS_OPEN: bool = Field(default=True)
    CLOSURES_OVERRIDE_SCHEDULE: bool = Field(default=True)

    # Monitoring settings
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Convenience accessor for settings
settings = get_settings()
