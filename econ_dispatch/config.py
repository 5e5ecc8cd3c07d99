""" Dispatch settings loaded from environment variables (prefix DISPATCH_) or a .env file. """

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(StrEnum):
    """ Supported log levels. """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DispatchSettings(BaseSettings):
    """ Limits and defaults applied to every solve. """

    model_config = SettingsConfigDict(
        env_prefix="DISPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level of the econ_dispatch loggers.")
    max_generators: int = Field(default=8, ge=1, description="Largest accepted fleet.")
    max_load: int = Field(default=100_000, ge=1, description="Largest accepted load. Bounds the size of the cost table.")
    allow_shutdown: bool = Field(default=False, description="Whether any unit may be switched off (p = 0) regardless of its minimum output.")
    display_decimals: int = Field(default=2, ge=0, description="Decimals used when printing costs.")


@lru_cache
def get_settings() -> DispatchSettings:
    """ Returns cached settings instance. """
    return DispatchSettings()
