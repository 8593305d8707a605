"""Runtime configuration read from the environment (and a local .env)."""

from typing import Annotated, List

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

load_dotenv()

DEFAULT_APP_ID = "golf-coordinator-default"
DEFAULT_CORS_ORIGINS = "http://localhost:5173"


class ConfigurationError(RuntimeError):
    """Required configuration is missing. The app cannot start."""


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")
    app_id: str = Field(DEFAULT_APP_ID, alias="APP_ID")
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [DEFAULT_CORS_ORIGINS], alias="CORS_ORIGINS"
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("app_id", mode="before")
    @classmethod
    def default_blank_app_id(cls, value):
        return value or DEFAULT_APP_ID

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        """CORS_ORIGINS is a comma-separated list."""
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()


def load_settings() -> Settings:
    """Read settings from the environment. DATABASE_URL is required."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            "DATABASE_URL environment variable is not set. "
            "Point it at the PostgreSQL database that stores tee times."
        ) from e
