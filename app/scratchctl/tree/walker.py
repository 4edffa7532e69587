"""Single-pass directory tree walker.

Classifies every entry under a root into files and directories and
reports directories in post-order, so the listing can be deleted in
order without further bookkeeping.
"""

import logging
import os
from pathlib import Path

from scratchctl.core.errors import TreeWalkError
from scratchctl.tree.models import TreeWalkResult

logger = logging.getLogger(__name__)


def walk_tree(root: Path, *, follow_symlinks: bool = True) -> TreeWalkResult:
    """Walk a directory subtree and return its files and directories.

    With follow_symlinks, links to directories are descended and links
    to files are listed as files; anything that is neither a regular
    file nor a directory once resolved (dangling links, sockets, fifos)
    is skipped. Without it, links are never descended and every
    non-directory entry is listed as a file.

    The walk is fully materialized before returning. Any I/O error
    abandons it; no partial result is ever returned.

    Args:
        root: Directory to walk.
        follow_symlinks: Whether to resolve symbolic links.

    Returns:
        TreeWalkResult with directories in strict post-order (root last).

    Raises:
        TreeWalkError: If root is not a directory, a directory cannot be
            listed, or a directory loop is found while following links.
    """
    try:
        if not root.is_dir() or (not follow_symlinks and root.is_symlink()):
            msg = f"Not a directory: {root}"
            raise TreeWalkError(msg)
        root_keys = frozenset({_dir_key(root.stat())}) if follow_symlinks else frozenset()
    except OSError as e:
        msg = f"Cannot walk {root}: {e}"
        raise TreeWalkError(msg) from e

    files: list[Path] = []
    directories: list[Path] = []

    # (directory, ancestor keys, children already pushed)
    stack: list[tuple[Path, frozenset[tuple[int, int]], bool]] = [(root, root_keys, False)]
    while stack:
        directory, ancestors, expanded = stack.pop()
        if expanded:
            directories.append(directory)
            continue

        stack.append((directory, ancestors, True))
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            msg = f"Cannot list directory {directory}: {e}"
            raise TreeWalkError(msg) from e

        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    child_ancestors = ancestors
                    if follow_symlinks:
                        key = _dir_key(path.stat())
                        if key in ancestors:
                            msg = f"Directory loop detected at {path}"
                            raise TreeWalkError(msg)
                        child_ancestors = ancestors | {key}
                    stack.append((path, child_ancestors, False))
                elif not follow_symlinks or entry.is_file():
                    files.append(path)
                else:
                    logger.debug("Skipping non-regular entry: %s", path)
            except OSError as e:
                msg = f"Cannot inspect {path}: {e}"
                raise TreeWalkError(msg) from e

    logger.debug(
        "Walked %s: %d files, %d directories", root, len(files), len(directories)
    )
    return TreeWalkResult(root=root, files=tuple(files), directories=tuple(directories))


def _dir_key(stat: os.stat_result) -> tuple[int, int]:
    """Identity of a directory on disk (device, inode)."""
    return (stat.st_dev, stat.st_ino)
