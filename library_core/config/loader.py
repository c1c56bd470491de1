"""Configuration loading for the VIM Library daemon.

This module handles loading settings from a YAML file and environment variables.

Contract:
- Inputs: Config file paths, environment variables
- Outputs: LibrarySettings objects
- Side Effects: Creates default config file if missing
"""

import logging
import os
from pathlib import Path

import yaml

from ..storage.paths import get_config_dir
from .settings import LibrarySettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """# VIM Library daemon configuration

# Server settings
host: "127.0.0.1"
port: 3000
log_level: "info"
workers: 1

# Directory containing the library folder
# Can be overridden with VIMLIB_DATA_PATH environment variable
# Supports: absolute paths, ~ for home directory, relative paths (./data)
data_path: "."
library_folder: "LibraryFolder"

# Upload size cap in megabytes
max_upload_mb: 50

# Allowed CORS origins
cors_origins:
  - "*"

# Admin gate for edit/delete/upload. Set the password through
# VIMLIB_ADMIN_PASSWORD rather than in this file.
require_admin: true
admin_token_ttl_seconds: 28800

# Back-navigation history cap for clients (null for unbounded)
max_history: 100
"""


def get_config_path() -> Path:
    """Get path to config file.

    Returns:
        Path to library.yaml in config directory

    Example:
        >>> config_path = get_config_path()
        >>> assert config_path.name == "library.yaml"
    """
    return get_config_dir() / "library.yaml"


def create_default_config(config_path: Path | None = None) -> Path:
    """Create default config file if it doesn't exist.

    Args:
        config_path: Optional target path (default: library.yaml in config dir)

    Returns:
        Path to the config file
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        logger.debug(f"Config file already exists: {config_path}")
        return config_path

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Created default config: {config_path}")
    return config_path


def load_config(config_path: Path | None = None) -> LibrarySettings:
    """Load settings from YAML and environment.

    Environment variables take precedence over YAML settings.
    Variables should be prefixed with VIMLIB_ (e.g., VIMLIB_PORT).

    Args:
        config_path: Optional config file path (default: library.yaml in config dir)

    Returns:
        Validated library settings
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        create_default_config(config_path)

    yaml_settings = {}
    try:
        with open(config_path, encoding="utf-8") as f:
            yaml_settings = yaml.safe_load(f) or {}
        logger.debug(f"Loaded config from {config_path}")
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.info("Using default settings and environment variables")

    # Only pass YAML values that don't have corresponding env vars
    filtered_yaml = {}
    for key, value in yaml_settings.items():
        env_key = f"VIMLIB_{key.upper()}"
        if env_key not in os.environ:
            filtered_yaml[key] = value

    settings = LibrarySettings(**filtered_yaml)

    logger.info(
        f"Library configuration loaded: host={settings.host}, port={settings.port}, root={settings.root_path}"
    )

    return settings
