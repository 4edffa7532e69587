"""Input fingerprints for build-output reuse.

A fingerprint is a hash of the number of requested paths, the number of
files they expand to, and the path and modification time of each
expanded file in sorted order. It is timestamp-based: touching a file
changes the fingerprint even if its content is unchanged.
"""

import logging
import os
import struct
from collections.abc import Iterable, Sequence
from pathlib import Path

from scratchctl.core.errors import FingerprintError, TreeWalkError
from scratchctl.core.hashing import DEFAULT_ALGORITHM, hash_bytes
from scratchctl.tree.walker import walk_tree

logger = logging.getLogger(__name__)

# Big-endian: int32 counts and path lengths, int64 epoch milliseconds
_COUNT_FORMAT = ">i"
_MTIME_FORMAT = ">q"


def expand_paths(paths: Iterable[Path]) -> list[Path]:
    """Replace each directory by every regular file in its subtree.

    Symbolic links are followed. Entries that are not directories pass
    through unchanged. Order of the result is not meaningful.

    Args:
        paths: Files and directories to expand.

    Returns:
        Expanded file list.

    Raises:
        TreeWalkError: If a directory cannot be walked.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(walk_tree(path, follow_symlinks=True).files)
        else:
            files.append(path)
    return files


def mtime_millis(path: Path) -> int:
    """Last-modified time of path in milliseconds since the epoch.

    Raises:
        OSError: If the file cannot be inspected.
    """
    return path.stat().st_mtime_ns // 1_000_000


def build_inputs_fingerprint(
    paths: Sequence[Path],
    *,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Compute the fingerprint of a set of input paths.

    The result only depends on the set of expanded files and their
    modification times, not on the order of paths or on filesystem
    iteration order.

    Args:
        paths: Input files and directories.
        algorithm: Digest algorithm passed to the hasher.

    Returns:
        Lowercase hex digest usable as an opaque cache key.

    Raises:
        FingerprintError: If any input cannot be expanded or inspected.
        HashAlgorithmError: If the algorithm is unavailable.
    """
    requested = list(paths)
    try:
        files = sorted(expand_paths(requested))
        data = bytearray()
        data += struct.pack(_COUNT_FORMAT, len(requested))
        data += struct.pack(_COUNT_FORMAT, len(files))
        for file in files:
            encoded = os.fsencode(file)
            data += struct.pack(_COUNT_FORMAT, len(encoded))
            data += encoded
            data += struct.pack(_MTIME_FORMAT, mtime_millis(file))
    except (OSError, ValueError, TreeWalkError) as e:
        msg = f"Failed to build hash for inputs: {e}"
        raise FingerprintError(msg) from e

    fingerprint = hash_bytes(bytes(data), algorithm)
    logger.debug(
        "Fingerprint of %d inputs (%d files): %s", len(requested), len(files), fingerprint
    )
    return fingerprint
