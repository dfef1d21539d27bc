"""Configuration for the benefits calculation engine.

Pydantic Settings-based configuration with environment variable and .env
support. Only operational behaviour is configurable. The statutory and
fallback constants used by the calculators live in pay_tables and are
fixed.

Usage:
    from vetbenefits_core.config import EngineSettings

    settings = EngineSettings()
    if settings.strict_grade_periods:
        print("Malformed grade periods will raise")
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Root configuration for the calculation engine.

    Environment Variables:
        VETBENEFITS_ENV: Environment name (development, staging, production, test)
        VETBENEFITS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        VETBENEFITS_LOG_JSON: Render log events as JSON instead of console text
        VETBENEFITS_STRICT_GRADE_PERIODS: Raise on malformed grade periods
        VETBENEFITS_AUDIT_ENABLED: Attach the step-by-step audit log to results

    Example:
        settings = EngineSettings(strict_grade_periods=True)
        calculator = MilitaryBuyBackCalculator(settings=settings)
    """

    model_config = SettingsConfigDict(
        env_prefix="VETBENEFITS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Render log events as JSON lines",
    )
    strict_grade_periods: bool = Field(
        default=False,
        description="Raise ValidationError for reversed, overlapping or out-of-order grade periods",
    )
    audit_enabled: bool = Field(
        default=True,
        description="Include the calculation audit log in results",
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def get_settings() -> EngineSettings:
    """Load settings from the environment."""
    return EngineSettings()
