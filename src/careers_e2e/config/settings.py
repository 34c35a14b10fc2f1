"""Suite settings using pydantic-settings."""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from careers_e2e.constants.locators import CAREERS_LOCATORS

_FALSY_FLAGS = {"", "0", "false", "no", "off"}


class Settings(BaseSettings):
    """Careers E2E configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,  # empty env values fall back to defaults
    )

    # Target
    base_url: str = Field(
        default=CAREERS_LOCATORS.urls.base_prod,
        description="Careers portal URL (BASE_URL overrides production)",
    )

    # CI toggles retries, worker count and the TestRail reporter
    ci: bool = Field(default=False, description="Running under CI")

    # TestRail (required only when CI is set)
    testrail_host: str | None = Field(default=None, description="TestRail host URL")
    testrail_username: str | None = Field(default=None, description="TestRail user")
    testrail_api_key: SecretStr | None = Field(default=None, description="TestRail API key")
    testrail_project_id: int | None = Field(default=None, description="TestRail project ID")
    testrail_suite_id: int | None = Field(default=None, description="TestRail suite ID")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Log level"
    )
    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")

    # Session health
    health_mode: Literal["observational", "strict"] = Field(
        default="observational",
        description="observational logs silent errors, strict fails the test on them",
    )

    # Timings (milliseconds)
    optional_click_timeout_ms: int = Field(
        default=5000, ge=1, description="Wait for optional elements such as consent banners"
    )
    search_sla_ms: int = Field(default=3000, ge=1, description="Search duration threshold")
    magic_settle_ms: int = Field(
        default=1000, ge=0, description="Settle time after the DOM injection"
    )
    min_body_text_length: int = Field(
        default=100, ge=0, description="Body text length below which a page counts as empty"
    )

    # Reports
    report_dir: str = Field(default="playwright-report", description="HTML report directory")

    @field_validator("ci", mode="before")
    @classmethod
    def parse_ci_flag(cls, v: Any) -> Any:
        """Treat any non-empty CI value as set, except explicit false-like values."""
        if isinstance(v, str):
            return v.strip().lower() not in _FALSY_FLAGS
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
