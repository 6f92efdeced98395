"""Settings for the cjs-require command line.

Settings are merged from two YAML files and the environment:
- User (~/.cjs-require/settings.yaml)
- Project (.cjs-require/settings.yaml) - overrides user
- Environment (CJS_REQUIRE_ENCODING, CJS_REQUIRE_LOG_LEVEL, CJS_REQUIRE_LOG_PATH) - overrides both
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

logger = logging.getLogger(__name__)

SETTINGS_DIR = ".cjs-require"
SETTINGS_FILE = "settings.yaml"

_ENV_KEYS = {
    "encoding": "CJS_REQUIRE_ENCODING",
    "log_level": "CJS_REQUIRE_LOG_LEVEL",
    "log_path": "CJS_REQUIRE_LOG_PATH",
}


class RequireSettings(BaseModel):
    """Effective settings for an installation created by the CLI."""

    encoding: str = Field(default="utf-8", description="Text encoding of module files")
    log_level: str = Field(default="WARNING", description="Root log level")
    log_path: str | None = Field(default=None, description="JSONL log file, disabled when unset")
    handlers: list[Literal["yaml"]] = Field(default_factory=list, description="Built-in handlers to register")
    globals: dict[str, Any] = Field(default_factory=dict, description="Names injected into every module scope")

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


def _read_settings(path: Path) -> dict[str, Any]:
    """Read one settings file, returning {} when missing or unreadable."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to read {path}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path}: top level is not a mapping")
        return {}
    return data


def load_settings(project_dir: Path | None = None, user_dir: Path | None = None) -> RequireSettings:
    """Load settings from user and project files plus the environment.

    Args:
        project_dir: Project settings directory (default: ./.cjs-require)
        user_dir: User settings directory (default: ~/.cjs-require)

    Returns:
        Validated RequireSettings

    Raises:
        pydantic.ValidationError: A setting has an invalid value
    """
    if project_dir is None:
        project_dir = Path(SETTINGS_DIR)
    if user_dir is None:
        user_dir = Path.home() / SETTINGS_DIR

    merged: dict[str, Any] = {}
    for path in (user_dir / SETTINGS_FILE, project_dir / SETTINGS_FILE):
        for key, value in _read_settings(path).items():
            if key == "globals" and isinstance(value, dict):
                merged.setdefault("globals", {}).update(value)
            else:
                merged[key] = value

    for key, env_key in _ENV_KEYS.items():
        if env_value := os.getenv(env_key):
            merged[key] = env_value

    return RequireSettings(**merged)
