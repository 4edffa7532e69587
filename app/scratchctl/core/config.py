"""scratchctl configuration and settings.

This module provides the configuration model and I/O functions for
temp workspaces, tree deletion and fingerprinting.

Configuration is stored in ~/.config/scratchctl/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scratchctl.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from scratchctl.core.hashing import DEFAULT_ALGORITHM, is_algorithm_available
from scratchctl.core.paths import get_config_path

logger = logging.getLogger(__name__)


class ScratchConfig(BaseModel):
    """Configuration for scratchctl.

    Attributes:
        temp_base_dir: Directory under which temp roots are created.
            None means the platform temp directory.
        max_workers: Size of the file-deletion worker pool.
            None means one worker per available CPU.
        hash_algorithm: Digest algorithm for input fingerprints.
        cleanup_on_exit: Delete the temp root when the process exits.
    """

    model_config = ConfigDict(extra="forbid")

    temp_base_dir: Annotated[
        Path | None,
        Field(description="Base directory for temp roots (None = system temp dir)"),
    ] = None
    max_workers: Annotated[
        int | None,
        Field(ge=1, le=256, description="File-deletion worker pool size (1-256)"),
    ] = None
    hash_algorithm: Annotated[
        str,
        Field(description="hashlib algorithm used for fingerprints"),
    ] = DEFAULT_ALGORITHM
    cleanup_on_exit: Annotated[
        bool,
        Field(description="Remove the temp root at process exit"),
    ] = True

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, v: str) -> str:
        """Reject algorithms hashlib cannot provide."""
        name = v.strip().lower()
        if not is_algorithm_available(name):
            msg = f"unsupported hash algorithm '{v}'"
            raise ValueError(msg)
        return name


def load_config(path: Path | None = None) -> ScratchConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ScratchConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ScratchConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> ScratchConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default ScratchConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return ScratchConfig()


def save_config(config: ScratchConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ScratchConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: ScratchConfig) -> dict[str, object]:
    """Convert ScratchConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are omitted.

    Args:
        config: The ScratchConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "hash_algorithm": config.hash_algorithm,
        "cleanup_on_exit": config.cleanup_on_exit,
    }
    if config.temp_base_dir is not None:
        result["temp_base_dir"] = str(config.temp_base_dir)
    if config.max_workers is not None:
        result["max_workers"] = config.max_workers
    return result
