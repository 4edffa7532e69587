"""Stored fingerprints keyed by name.

Lets callers remember the fingerprint that produced a build output and
check later whether that output can be reused.
"""

import logging
import re
from pathlib import Path

from scratchctl.core.files import ensure_dir, rename_file
from scratchctl.core.paths import get_cache_dir

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def get_store_dir(base_dir: Path | None = None) -> Path:
    """Directory holding stored fingerprints.

    Returns:
        Path to ~/.cache/scratchctl/fingerprints/ unless base_dir is given.
    """
    return (base_dir or get_cache_dir()) / "fingerprints"


def _key_path(name: str, base_dir: Path | None) -> Path:
    if not _NAME_PATTERN.match(name) or name in (".", ".."):
        msg = f"Invalid fingerprint name: {name!r}"
        raise ValueError(msg)
    return get_store_dir(base_dir) / f"{name}.key"


def load_fingerprint(name: str, base_dir: Path | None = None) -> str | None:
    """Read a stored fingerprint.

    Args:
        name: Key name (letters, digits, '.', '_', '-').
        base_dir: Override for the cache directory.

    Returns:
        The stored fingerprint, or None if none is stored or it is unreadable.
    """
    path = _key_path(name, base_dir)
    try:
        value = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Cannot read stored fingerprint %s: %s", path, e)
        return None
    return value or None


def save_fingerprint(name: str, fingerprint: str, base_dir: Path | None = None) -> Path:
    """Store a fingerprint, replacing any previous value.

    Args:
        name: Key name (letters, digits, '.', '_', '-').
        fingerprint: Value to store.
        base_dir: Override for the cache directory.

    Returns:
        Path of the stored key file.

    Raises:
        RuntimeCreationError: If the store directory cannot be created.
        OSError: If the key file cannot be written.
    """
    path = _key_path(name, base_dir)
    ensure_dir(path.parent, "fingerprint store")
    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_text(fingerprint + "\n", encoding="utf-8")
    if not rename_file(tmp_path, path):
        msg = f"Cannot store fingerprint at {path}"
        raise OSError(msg)
    return path


def is_reusable(name: str, fingerprint: str, base_dir: Path | None = None) -> bool:
    """Check a fresh fingerprint against the stored one.

    Args:
        name: Key name of the stored fingerprint.
        fingerprint: Freshly computed fingerprint.
        base_dir: Override for the cache directory.

    Returns:
        True if a stored fingerprint exists and matches.
    """
    return load_fingerprint(name, base_dir) == fingerprint
