"""
Runtime settings for unitdeps, read from the environment or a .env file.
"""
import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("unitdeps")

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class GraphSettings(BaseModel):
    """Settings shared by the builder and the graph."""
    log_level: str = Field(default="WARNING", description="Level applied to the unitdeps logger")
    trace_separator: str = Field(default=" -> ", description="Separator used when rendering cycle traces")

    @field_validator("log_level")
    @classmethod
    def check_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> "GraphSettings":
        load_dotenv()
        return cls(
            log_level=os.getenv("UNITDEPS_LOG_LEVEL", "WARNING"),
            trace_separator=os.getenv("UNITDEPS_TRACE_SEPARATOR", " -> "),
        )


def configure_logging(settings: Optional[GraphSettings] = None) -> GraphSettings:
    """Apply the configured level to the unitdeps logger and return the settings used."""
    if settings is None:
        settings = GraphSettings.from_env()
    logger.setLevel(settings.log_level)
    logger.debug(f"unitdeps logging set to {settings.log_level}")
    return settings
