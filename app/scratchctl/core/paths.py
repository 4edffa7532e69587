"""XDG-compliant path management for scratchctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and cache storage, plus the resolution
of the base directory under which temp workspaces are created.

XDG defaults:
- Config: ~/.config/scratchctl/
- Cache: ~/.cache/scratchctl/
"""

import os
import tempfile
from pathlib import Path

from scratchctl.core.files import ensure_dir

# Application identifier for directory naming
APP_NAME = "scratchctl"

# Environment override for the temp workspace base directory
TEMP_DIR_ENV = "SCRATCHCTL_TEMP_DIR"


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
        Path to ~/.config/scratchctl/ (or XDG_CONFIG_HOME/scratchctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_cache_dir() -> Path:
    """Get the cache directory path.

    Stored input fingerprints live here.

    Returns:
        Path to ~/.cache/scratchctl/ (or XDG_CACHE_HOME/scratchctl/).
    """
    return _get_xdg_dir("XDG_CACHE_HOME", ".cache")


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/scratchctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_system_temp_dir() -> Path:
    """Get the platform's default temporary-file location."""
    return Path(tempfile.gettempdir())


def resolve_temp_base_dir(configured: Path | None = None) -> Path:
    """Resolve the directory under which temp roots are created.

    Priority:
    1. SCRATCHCTL_TEMP_DIR environment variable
    2. Configured base directory
    3. Platform temp directory

    Args:
        configured: Base directory from configuration, if any.

    Returns:
        Base directory path (not created).
    """
    override = os.environ.get(TEMP_DIR_ENV)
    if override:
        return Path(override).expanduser()
    if configured is not None:
        return configured.expanduser()
    return get_system_temp_dir()


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeCreationError: If the directory cannot be created.
    """
    return ensure_dir(get_config_dir(), "config")


def ensure_cache_dir() -> Path:
    """Create the cache directory if it doesn't exist.

    Returns:
        Path to the cache directory.

    Raises:
        RuntimeCreationError: If the directory cannot be created.
    """
    return ensure_dir(get_cache_dir(), "cache")
