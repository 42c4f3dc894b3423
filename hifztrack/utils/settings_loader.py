"""
Settings loader for hifztrack.

Loads memorization settings from a YAML file in the config/ directory.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from hifztrack.schemas import MemorizationSettings


# Default config directory (relative to project root)
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "memorization.yaml"
SETTINGS_ENV_VAR = "HIFZTRACK_SETTINGS"


def resolve_settings_path(path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Pick the settings file to read.

    Args:
        path: Explicit path; wins over the environment

    Returns:
        Tuple of (path, explicit) where explicit is False only for the
        built-in default location
    """
    if path is not None:
        return Path(path), True

    load_dotenv(PROJECT_ROOT / ".env")
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return DEFAULT_SETTINGS_PATH, False


def read_settings_file(file_path: Path) -> dict[str, Any]:
    """
    Parse a YAML settings file into a mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document is not a mapping
        yaml.YAMLError: If YAML parsing fails
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    # Values may sit under a top-level "memorization" key
    if isinstance(data, dict):
        data = data.get("memorization", data)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {file_path}")
    return data


def load_settings(path: Optional[Path] = None) -> MemorizationSettings:
    """
    Load memorization settings.

    Args:
        path: Optional settings file; otherwise $HIFZTRACK_SETTINGS (a
            project .env is honored), otherwise config/memorization.yaml

    Returns:
        Validated MemorizationSettings. A missing default file yields the
        built-in defaults.

    Raises:
        FileNotFoundError: If an explicitly requested file doesn't exist
        pydantic.ValidationError: If values are out of range
    """
    file_path, explicit = resolve_settings_path(path)
    if not explicit and not file_path.exists():
        return MemorizationSettings()
    return MemorizationSettings(**read_settings_file(file_path))
