"""Application configuration with validation."""
from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from assessment_platform.scoring.records import ScoringPolicy


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Candidate Assessment Platform"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    MAX_CANDIDATES_PER_RANKING: int = Field(default=500, ge=1, le=10000)

    # Scoring defaults (used when a process configuration is silent)
    DEFAULT_OBJECTIVE_WEIGHT: float = Field(default=0.5, ge=0.0, le=1.0)
    DEFAULT_OPINION_WEIGHT: float = Field(default=0.5, ge=0.0, le=1.0)
    UNGROUPED_MAX_WEIGHT: float = Field(default=5.0, gt=0.0, le=100.0)
    DEFAULT_TRAIT_WEIGHT: float = Field(default=1.0, ge=0.0, le=100.0)
    DEFAULT_CUTOFF_SCORE: float = Field(default=70.0, ge=0.0, le=100.0)

    @model_validator(mode="after")
    def validate_default_weights(self):
        """Default combiner weights are the zero-sum fallback, so they cannot both be zero."""
        if self.DEFAULT_OBJECTIVE_WEIGHT + self.DEFAULT_OPINION_WEIGHT <= 0:
            raise ValueError("DEFAULT_OBJECTIVE_WEIGHT and DEFAULT_OPINION_WEIGHT cannot both be 0")
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def scoring_policy(self) -> ScoringPolicy:
        """Engine defaults built from these settings."""
        return ScoringPolicy(
            default_objective_weight=Decimal(str(self.DEFAULT_OBJECTIVE_WEIGHT)),
            default_opinion_weight=Decimal(str(self.DEFAULT_OPINION_WEIGHT)),
            ungrouped_max_weight=Decimal(str(self.UNGROUPED_MAX_WEIGHT)),
            default_trait_weight=Decimal(str(self.DEFAULT_TRAIT_WEIGHT)),
            default_cutoff_score=Decimal(str(self.DEFAULT_CUTOFF_SCORE)),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
