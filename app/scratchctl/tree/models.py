"""Data structures produced by tree walks and bulk deletions."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Kind of filesystem entry a deletion failure refers to.

    Attributes:
        FILE: Regular file, symlink or other non-directory entry.
        DIRECTORY: Directory.
    """

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class TreeWalkResult:
    """Fully materialized listing of a directory subtree.

    Attributes:
        root: Directory that was walked.
        files: Every non-directory entry found (order irrelevant).
        directories: Every directory in strict post-order. A directory
            always comes after all of its descendants, so the root is last.
    """

    root: Path
    files: tuple[Path, ...]
    directories: tuple[Path, ...]

    @property
    def total(self) -> int:
        """Number of entries in the walk, root included."""
        return len(self.files) + len(self.directories)


@dataclass(frozen=True, slots=True)
class DeletionFailure:
    """A single path that could not be removed during a bulk deletion.

    Attributes:
        path: Path that is still present.
        kind: Whether the path is a file or a directory.
        error: Error message from the failed removal.
    """

    path: Path
    kind: EntryKind
    error: str


@dataclass(frozen=True, slots=True)
class DeletionReport:
    """Outcome of deleting a directory tree.

    Attributes:
        root: Root of the deleted tree.
        files_deleted: Number of files removed (planned, for dry runs).
        directories_deleted: Number of directories removed (planned, for dry runs).
        failures: Best-effort failures, in the order they were observed.
        keep_root: Whether the root directory itself was preserved.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    root: Path
    files_deleted: int
    directories_deleted: int
    failures: tuple[DeletionFailure, ...] = ()
    keep_root: bool = False
    dry_run: bool = False

    @property
    def success(self) -> bool:
        """True if every discovered path was removed."""
        return not self.failures

    @property
    def failed_files(self) -> tuple[DeletionFailure, ...]:
        """Failures of file removals."""
        return tuple(f for f in self.failures if f.kind == EntryKind.FILE)

    @property
    def failed_directories(self) -> tuple[DeletionFailure, ...]:
        """Failures of directory removals."""
        return tuple(f for f in self.failures if f.kind == EntryKind.DIRECTORY)
