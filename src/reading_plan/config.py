"""Configuration management using pydantic-settings."""

import logging
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reading_plan.utils.errors import ConfigurationError


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class DatabaseSettings(BaseSettings):
    """Database configuration for the chapter table."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="mysql://root@localhost:3306/bible",
        description="Database connection URL. Env var: DATABASE_URL",
    )
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_recycle: int = Field(default=3600, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL queries (for debugging)")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if "://" not in v:
            raise ValueError("Database URL must include a scheme, e.g. mysql://user@host/db")
        return v

    @property
    def async_url(self) -> str:
        """Get the database URL with an async driver."""
        if self.url.startswith("mysql://"):
            return self.url.replace("mysql://", "mysql+aiomysql://", 1)
        if self.url.startswith("mysql+pymysql://"):
            return self.url.replace("mysql+pymysql://", "mysql+aiomysql://", 1)
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if self.url.startswith("postgresql+psycopg2://"):
            return self.url.replace("postgresql+psycopg2://", "postgresql+asyncpg://", 1)
        if self.url.startswith("sqlite://"):
            return self.url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return self.url


class PlannerSettings(BaseSettings):
    """Partition search configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    initial_tolerance: float = Field(
        default=0.01,
        ge=0,
        description="Starting tolerance fraction for the search. Env var: PLANNER_INITIAL_TOLERANCE",
    )
    convergence_tolerance: int = Field(
        default=0,
        ge=0,
        description="Acceptable difference between achieved and requested day count. Env var: PLANNER_CONVERGENCE_TOLERANCE",
    )
    max_iterations: int = Field(
        default=5000,
        gt=0,
        description="Hard cap on search iterations. Env var: PLANNER_MAX_ITERATIONS",
    )
    step: float = Field(
        default=0.001,
        gt=0,
        description="Per-iteration tolerance adjustment. Env var: PLANNER_STEP",
    )


class OutputSettings(BaseSettings):
    """Reading schedule output configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OUTPUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    result_dir: str = Field(
        default="result",
        description="Directory where schedule files are written. Env var: OUTPUT_RESULT_DIR",
    )
    filename_template: str = Field(
        default="성경통독표({days}일).csv",
        description="Schedule filename, must contain '{days}'. Env var: OUTPUT_FILENAME_TEMPLATE",
    )

    @field_validator("filename_template")
    @classmethod
    def validate_filename_template(cls, v: str) -> str:
        """Validate that the template embeds the day count."""
        if "{days}" not in v:
            raise ValueError("filename_template must contain '{days}'")
        return v


class ServerSettings(BaseSettings):
    """Server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Server host. Env var: HOST")
    port: int = Field(default=8080, description="HTTP server port. Env var: PORT")
    reload: bool = Field(
        default=False, description="Enable auto-reload (development only). Env var: RELOAD"
    )


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="reading-plan", description="Application name. Env var: APP_NAME"
    )
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment. Env var: ENVIRONMENT",
    )
    debug: bool = Field(default=False, description="Enable debug mode. Env var: DEBUG")
    log_level: str = Field(
        default="INFO", description="Logging level. Env var: LOG_LEVEL"
    )

    # Sub-settings
    database: Optional[DatabaseSettings] = None
    planner: Optional[PlannerSettings] = None
    output: Optional[OutputSettings] = None
    server: Optional[ServerSettings] = None

    @model_validator(mode="after")
    def initialize_nested_settings(self) -> "Settings":
        """Initialize nested settings to ensure they read from environment."""
        if self.database is None:
            self.database = DatabaseSettings()
        if self.planner is None:
            self.planner = PlannerSettings()
        if self.output is None:
            self.output = OutputSettings()
        if self.server is None:
            self.server = ServerSettings()
        return self

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v):
        """Parse environment from string."""
        if isinstance(v, str):
            try:
                return Environment(v.lower())
            except ValueError:
                return Environment.DEVELOPMENT
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def validate_production_settings(self) -> None:
        """Validate that production settings are safe."""
        if self.is_production:
            if self.debug:
                raise ValueError("DEBUG must be False in production")
            if self.database.echo:
                raise ValueError("DATABASE_ECHO must be False in production")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
        try:
            _settings.validate_production_settings()
        except ValueError as e:
            logging.getLogger("reading_plan").error(f"Configuration validation failed: {e}")
            if _settings.is_production:
                raise ConfigurationError(str(e)) from e  # Fail fast in production
    return _settings
