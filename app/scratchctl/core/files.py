"""Small filesystem primitives used across scratchctl.

All directory creation funnels through ensure_dir(), which serializes
mkdir calls behind a single module lock.
"""

import logging
import os
import threading
from pathlib import Path

from scratchctl.core.errors import RuntimeCreationError

logger = logging.getLogger(__name__)

_MKDIR_LOCK = threading.Lock()


def ensure_dir(path: Path, name: str = "") -> Path:
    """Create a directory (and parents) if it doesn't exist.

    An already existing directory is success. Ending up without a
    directory at path after the call is fatal.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeCreationError: If the directory cannot be created.
    """
    label = f"{name} directory" if name else "directory"
    with _MKDIR_LOCK:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            msg = f"Cannot create {label} {path}: Permission denied"
            raise RuntimeCreationError(msg) from e
        except FileExistsError as e:
            msg = f"Cannot create {label} {path}: a non-directory exists at that path"
            raise RuntimeCreationError(msg) from e
        except OSError as e:
            msg = f"Cannot create {label} {path}: {e}"
            raise RuntimeCreationError(msg) from e
        if not path.is_dir():
            msg = f"Cannot create {label} {path}"
            raise RuntimeCreationError(msg)
    return path


def ensure_parent_dir(path: Path) -> Path:
    """Create the parent directory of a file path.

    Args:
        path: File path whose parent should exist.

    Returns:
        The parent directory.

    Raises:
        RuntimeCreationError: If the parent cannot be created.
    """
    return ensure_dir(path.absolute().parent)


def delete_file_if_exists(path: Path) -> bool:
    """Delete a file, ignoring a missing one.

    Args:
        path: File to delete.

    Returns:
        True if a file was deleted, False if nothing existed.

    Raises:
        OSError: If the file exists but cannot be deleted.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def rename_file(source: Path, target: Path, *, replace: bool = True) -> bool:
    """Move source to target, reporting conflicts as False.

    A missing source, an existing target (when replace is False) or any
    other OS error is logged and reported as a failed rename; the caller
    decides what to do about it.

    Args:
        source: Existing path to move.
        target: Destination path.
        replace: Overwrite an existing target.

    Returns:
        True if the rename succeeded.
    """
    if not replace and (target.exists() or target.is_symlink()):
        logger.error("File with that name already exists: %s", target)
        return False

    try:
        if replace:
            os.replace(source, target)
        else:
            os.rename(source, target)
    except FileNotFoundError as e:
        logger.error("File to rename not found: %s (%s)", source, e)
        return False
    except FileExistsError:
        logger.error("File with that name already exists: %s", target)
        return False
    except OSError as e:
        logger.error("Error renaming %s to %s: %s", source, target, e)
        return False
    return True
