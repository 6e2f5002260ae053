"""XDG-compliant path management for pacup.

This module provides standardized paths following the XDG Base Directory
conventions for configuration and cache storage.

XDG defaults:
- Config: ~/.config/pacup/
- Cache: ~/.cache/pacup/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pacup"

# System-wide pacman configuration, read for IgnorePkg
DEFAULT_PACMAN_CONF = Path("/etc/pacman.conf")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pacup/ (or XDG_CONFIG_HOME/pacup/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_cache_dir() -> Path:
    """Get the cache directory path.

    The VCS revision store lives here: it can be rebuilt by re-tracking
    packages, so it is cache rather than configuration.

    Returns:
        Path to ~/.cache/pacup/ (or XDG_CACHE_HOME/pacup/).
    """
    return _get_xdg_dir("XDG_CACHE_HOME", ".cache")


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/pacup/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/pacup/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_vcs_path() -> Path:
    """Get the VCS revision store path.

    Returns:
        Path to ~/.cache/pacup/vcs.json.
    """
    return get_cache_dir() / "vcs.json"
