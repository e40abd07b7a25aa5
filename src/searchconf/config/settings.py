"""Settings for searchconf itself.

These control where the configuration store lives and how searchconf
logs. They come from SEARCHCONF_* environment variables and .env, not
from the store they point at.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from searchconf.config.store import DEFAULT_CONFIG_PATH


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class ResolverSettings(BaseSettings):
    """Runtime settings of the configuration resolver.

    ``SEARCHCONF_CONFIG_PATH`` moves the store,
    ``SEARCHCONF_LOGGING__LEVEL`` changes the log level.
    """

    model_config = {
        "env_prefix": "SEARCHCONF_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    config_path: Path = Field(default=DEFAULT_CONFIG_PATH)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_resolver_settings(config_path: Path | str | None = None) -> ResolverSettings:
    """Load resolver settings; an explicit ``config_path`` wins over the environment."""
    if config_path:
        return ResolverSettings(config_path=Path(config_path))
    return ResolverSettings()
