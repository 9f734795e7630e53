"""Configuration loaded from environment variables.

Settings are read after load_dotenv(), so a local .env file works the same as
exported variables.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from model_serializer.fields import DEFAULT_TAG


@dataclass
class Settings:
    """All configuration loaded from environment variables."""

    # Metadata key holding each field's wire name
    tag: str = DEFAULT_TAG
    log_level: str = "WARNING"


ENV_VARS: dict[str, str] = {
    "MODEL_SERIALIZER_TAG": "Field metadata key holding the wire name",
    "MODEL_SERIALIZER_LOG_LEVEL": "Log level for configure_logging()",
}


def load_settings() -> Settings:
    """Load and return settings from .env file."""
    load_dotenv()
    return Settings(
        tag=os.getenv("MODEL_SERIALIZER_TAG", DEFAULT_TAG) or DEFAULT_TAG,
        log_level=os.getenv("MODEL_SERIALIZER_LOG_LEVEL", "WARNING").upper(),
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Set up root logging at the configured level.

    Unknown level names fall back to WARNING.
    """
    settings = settings or load_settings()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
