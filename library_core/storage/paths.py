"""Path resolution for VIM Library storage locations.

This module provides path resolution based on the VIMLIB_HOME environment variable.

Contract:
- Inputs: Environment variables (VIMLIB_HOME, VIMLIB_CONFIG_DIR)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path


def get_home_dir() -> Path:
    """Get VIMLIB_HOME from environment.

    Returns:
        Path to home directory (default: .vimlib)
    """
    root = os.environ.get("VIMLIB_HOME", ".vimlib")
    return Path(root).resolve()


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($VIMLIB_HOME/config)
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("VIMLIB_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
