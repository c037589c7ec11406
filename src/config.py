"""Configuration management for gentree.

Loads settings from environment variables (prefixed ``GENTREE_``) or a
``.env`` file. Command-line options override these values.
"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GENTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Anchor selection
    strict_parents: bool = False

    # Generation propagation
    convergence: Literal["overwrite", "error"] = "overwrite"

    # Rendering
    rankdir: Literal["TB", "BT", "LR", "RL"] = "BT"
    include_unresolved: bool = True

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Path | None = None


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
