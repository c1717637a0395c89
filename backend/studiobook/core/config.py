# backend/studiobook/core/config.py
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_HORIZON_CHOICES, DEFAULT_HORIZON_MONTHS


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="Deployment environment name",
    )
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Root log level for the API process",
    )
    database_url: str = Field(
        default="sqlite:///./studiobook.db",
        alias="DATABASE_URL",
        description="SQLAlchemy URL for availability and session storage",
    )

    # Availability calendar
    availability_horizon_choices: List[int] = Field(
        default_factory=lambda: list(DEFAULT_HORIZON_CHOICES),
        alias="AVAILABILITY_HORIZON_CHOICES",
        description="Month counts a weekly template may be projected forward (JSON list)",
    )
    availability_default_horizon_months: int = Field(
        default=DEFAULT_HORIZON_MONTHS,
        alias="AVAILABILITY_DEFAULT_HORIZON_MONTHS",
        description="Horizon preselected when none is supplied",
    )

    # External profile store (PATCH /api/photographers/profile)
    profile_api_base_url: Optional[str] = Field(
        default=None,
        alias="PROFILE_API_BASE_URL",
        description="When set, availability is written through the profile API instead of the local DB",
    )
    profile_api_token: Optional[SecretStr] = Field(
        default=None,
        alias="PROFILE_API_TOKEN",
        description="Bearer token sent to the profile API",
    )
    profile_api_timeout_seconds: float = Field(
        default=10.0,
        alias="PROFILE_API_TIMEOUT_SECONDS",
        description="Timeout for a single profile API write",
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("availability_horizon_choices")
    @classmethod
    def _normalize_horizons(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("At least one horizon choice is required")
        if any(months <= 0 for months in v):
            raise ValueError("Horizon choices must be positive month counts")
        return sorted(set(v))

    @model_validator(mode="after")
    def _default_horizon_is_offered(self) -> "Settings":
        if self.availability_default_horizon_months not in self.availability_horizon_choices:
            raise ValueError(
                "AVAILABILITY_DEFAULT_HORIZON_MONTHS must be one of "
                f"{self.availability_horizon_choices}"
            )
        return self

    @property
    def uses_profile_api(self) -> bool:
        return bool((self.profile_api_base_url or "").strip())


settings = Settings()
