"""Settings for the option store itself, read from ``OPTIONSTORE_*`` variables."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from optionstore.storage import CONFIG_DIR_ENV

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Structlog-based logging configuration."""

    level: str = "INFO"
    json_logs: bool = False
    include_caller: bool = False  # Include file:line info (useful for debugging)
    extra_fields: dict[str, str] = Field(default_factory=lambda: {"service": "optionstore"})

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of {', '.join(_LOG_LEVELS)}.")
        return level


class StoreSettings(BaseModel):
    """Runtime settings for tools built on the option store."""

    config_dir: Path = Path("config")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "StoreSettings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict = {}
        logging_values: dict = {}

        if env.get(CONFIG_DIR_ENV):
            values["config_dir"] = env[CONFIG_DIR_ENV]
        if env.get("OPTIONSTORE_LOG_LEVEL"):
            logging_values["level"] = env["OPTIONSTORE_LOG_LEVEL"]
        if env.get("OPTIONSTORE_JSON_LOGS"):
            logging_values["json_logs"] = env["OPTIONSTORE_JSON_LOGS"].lower() == "true"

        if logging_values:
            values["logging"] = LoggingConfig(**logging_values)
        return cls(**values)
