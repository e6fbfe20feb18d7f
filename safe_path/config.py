"""
Safe Path Configuration

Path flavor and logging settings for the guards.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path, PurePosixPath, PureWindowsPath
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

FLAVORS = {
    'native': Path,
    'posix': PurePosixPath,
    'windows': PureWindowsPath,
}


class SafePathConfig(BaseModel):
    """Configuration for the join and parent guards."""

    # Parsing
    flavor: str = Field(
        default='native',
        description="Path flavor used to parse str/bytes inputs (native, posix, windows)"
    )

    # Logging
    emit_events: bool = Field(
        default=True,
        description="Emit a log event for every guard decision"
    )

    max_path_length: int = Field(
        default=100,
        ge=16,
        le=4096,
        description="Maximum characters of an untrusted path written to a log record"
    )

    @field_validator('flavor')
    @classmethod
    def validate_flavor(cls, v):
        """Validate flavor name."""
        v = v.strip().lower()
        if v not in FLAVORS:
            raise ValueError(f"flavor must be one of: {', '.join(sorted(FLAVORS))}")
        return v

    @property
    def path_class(self):
        return FLAVORS[self.flavor]

    @classmethod
    def from_env(cls) -> 'SafePathConfig':
        """Load configuration from environment variables."""
        return cls(
            flavor=os.getenv('SAFE_PATH_FLAVOR', 'native'),
            emit_events=os.getenv('SAFE_PATH_EMIT_EVENTS', 'true').lower() == 'true',
            max_path_length=int(os.getenv('SAFE_PATH_MAX_PATH_LENGTH', '100'))
        )


@lru_cache(maxsize=None)
def default_config() -> SafePathConfig:
    """
    Configuration used by guard calls that pass no ``config``.

    The environment is read once per process. Invalid logging settings
    fall back to their defaults with a warning; an invalid flavor still
    raises, since it changes how paths are parsed.
    """
    try:
        return SafePathConfig.from_env()
    except ValueError as exc:
        logger.warning("Ignoring invalid SAFE_PATH logging settings: %s", exc)
        return SafePathConfig(flavor=os.getenv('SAFE_PATH_FLAVOR', 'native'))
