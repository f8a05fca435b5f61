"""
Job Folder Configuration — Load and validate jobfolders.yaml.

Usage:
    from jobfolders.engine.config import load_config, get_config
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from jobfolders.engine.errors import JobFolderConfigError

CONFIG_FILE_NAME = "jobfolders.yaml"


# ---------------------------------------------------------------------------
# Pydantic models for jobfolders.yaml
# ---------------------------------------------------------------------------

class StoreConfig(BaseModel):
    directory: str = ".jobfolders/store"
    seed_unclassified: bool = True


class LoggingConfig(BaseModel):
    enabled: bool = True
    level: str = "INFO"
    directory: str = ".jobfolders/logs"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"level must be DEBUG/INFO/WARNING/ERROR/CRITICAL, got '{v}'")
        return level

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.level)


class FolderPlatformConfig(BaseModel):
    """Root model for jobfolders.yaml."""
    store: StoreConfig = StoreConfig()
    logging: LoggingConfig = LoggingConfig()


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_config: Optional[FolderPlatformConfig] = None


def _find_project_root() -> Path:
    """Find the project root by looking for jobfolders.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILE_NAME).exists():
            return parent
    return current


def load_config(config_path: Optional[str] = None) -> FolderPlatformConfig:
    """
    Load and validate jobfolders.yaml.

    Args:
        config_path: Explicit path to the file. If None, auto-discovers.

    Returns:
        Validated FolderPlatformConfig. Defaults when no file exists.

    Raises:
        JobFolderConfigError: the file is not valid YAML or fails validation.
    """
    global _config

    if config_path is None:
        config_path = str(_find_project_root() / CONFIG_FILE_NAME)

    path = Path(config_path)
    if not path.exists():
        _config = FolderPlatformConfig()
        return _config

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise JobFolderConfigError(f"Invalid YAML in {path}: {e}", config_path=str(path)) from e

    if not isinstance(raw, dict):
        raise JobFolderConfigError(
            f"Expected a mapping at the top of {path}", config_path=str(path)
        )

    # Accept both a bare document and one nested under "jobfolders:"
    data = raw.get("jobfolders", raw)

    try:
        _config = FolderPlatformConfig(**data)
    except ValidationError as e:
        raise JobFolderConfigError(
            f"Invalid configuration in {path}: {e}", config_path=str(path)
        ) from e
    return _config


def get_config() -> FolderPlatformConfig:
    """Get the currently loaded config, loading if necessary."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded config (tests, CLI --config switches)."""
    global _config
    _config = None
