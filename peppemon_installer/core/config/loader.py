"""
Configuration loader — reads peppemon-install.yml into InstallerSettings.

The file is optional: without one every default applies. It is looked
up in the source tree, or taken from PEPPEMON_INSTALL_CONFIG when set.
It reads YAML, validates against the Pydantic schema, and returns
typed settings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from peppemon_installer.core.models.settings import InstallerSettings

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "peppemon-install.yml"

# Env var naming an explicit settings file
SETTINGS_ENV_VAR = "PEPPEMON_INSTALL_CONFIG"


class ConfigError(Exception):
    """Raised when installer configuration is invalid or unreadable."""


def find_settings_file(
    source_dir: Path,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Locate the settings file, if any.

    Args:
        source_dir: The source tree to look in.
        env: Environment to consult for ``PEPPEMON_INSTALL_CONFIG``.

    Returns:
        Path to the file, or None when no settings file applies.

    Raises:
        ConfigError: If the env var names a file that does not exist.
    """
    explicit = (env or {}).get(SETTINGS_ENV_VAR)
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigError(f"{SETTINGS_ENV_VAR} points to a missing file: {path}")
        return path

    candidate = source_dir / SETTINGS_FILE
    return candidate if candidate.is_file() else None


def load_settings(path: Path | None = None) -> InstallerSettings:
    """Load and validate installer settings.

    Args:
        path: Settings file. None → all defaults.

    Returns:
        Validated InstallerSettings.

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    if path is None:
        logger.debug("No %s found, using defaults", SETTINGS_FILE)
        return InstallerSettings()

    logger.debug("Loading installer settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return InstallerSettings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = InstallerSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration in {path}: {e}") from e

    logger.info("Loaded installer settings from %s", path)
    return settings
