"""Recursive directory tree deletion.

Deletes a subtree in two phases: every file concurrently on a worker
pool, then, once the pool has fully drained, every directory
sequentially in post-order. Individual failures are logged and
recorded but never abort the operation; only a failed walk does, and
in that case nothing is touched.
"""

import logging
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from scratchctl.core.errors import TreeWalkError
from scratchctl.tree.models import DeletionFailure, DeletionReport, EntryKind
from scratchctl.tree.walker import walk_tree

logger = logging.getLogger(__name__)

RemoveFunc = Callable[[Path], None]


def default_worker_count() -> int:
    """Worker pool size matching available parallelism."""
    return os.cpu_count() or 1


class TreeDeleter:
    """Deletes directory trees with a parallel file phase.

    Attributes:
        _max_workers: Size of the file-deletion worker pool.
        _dry_run: If True, report what would be deleted without deleting.
        _remove_file: Callable removing a single non-directory entry.
        _remove_dir: Callable removing a single empty directory.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        *,
        dry_run: bool = False,
        remove_file: RemoveFunc = os.unlink,
        remove_dir: RemoveFunc = os.rmdir,
    ) -> None:
        """Initialize the TreeDeleter.

        Args:
            max_workers: Worker pool size. None uses one worker per CPU.
            dry_run: If True, walk the tree but delete nothing.
            remove_file: Removal function for files and links.
            remove_dir: Removal function for empty directories.
        """
        if max_workers is not None and max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)
        self._max_workers = max_workers or default_worker_count()
        self._dry_run = dry_run
        self._remove_file = remove_file
        self._remove_dir = remove_dir

    @property
    def max_workers(self) -> int:
        """Size of the file-deletion worker pool."""
        return self._max_workers

    def delete(self, root: Path, keep_root: bool = False) -> DeletionReport:
        """Delete a directory tree.

        Args:
            root: Directory to delete.
            keep_root: If True, remove every descendant but keep root itself.

        Returns:
            DeletionReport with counts and best-effort failures. A root
            that no longer exists yields an empty, successful report.

        Raises:
            TreeWalkError: If the tree cannot be walked. Nothing is deleted.
        """
        if not root.exists() and not root.is_symlink():
            logger.debug("Nothing to delete at %s", root)
            return DeletionReport(
                root=root,
                files_deleted=0,
                directories_deleted=0,
                keep_root=keep_root,
                dry_run=self._dry_run,
            )

        walk = walk_tree(root, follow_symlinks=False)

        directories = list(walk.directories)
        if keep_root:
            # Root is always last in a post-order listing of its own subtree
            directories.pop()

        if self._dry_run:
            for path in walk.files:
                logger.info("Dry-run: would delete file %s", path)
            for path in directories:
                logger.info("Dry-run: would delete directory %s", path)
            return DeletionReport(
                root=root,
                files_deleted=len(walk.files),
                directories_deleted=len(directories),
                keep_root=keep_root,
                dry_run=True,
            )

        failures: list[DeletionFailure] = []

        file_failures = self._delete_files(walk.files)
        failures.extend(file_failures)

        directories_deleted = 0
        for directory in directories:
            failure = self._delete_single(directory, EntryKind.DIRECTORY)
            if failure is None:
                directories_deleted += 1
            else:
                failures.append(failure)

        report = DeletionReport(
            root=root,
            files_deleted=len(walk.files) - len(file_failures),
            directories_deleted=directories_deleted,
            failures=tuple(failures),
            keep_root=keep_root,
        )
        logger.debug(
            "Deleted %s: %d files, %d directories, %d failures",
            root,
            report.files_deleted,
            report.directories_deleted,
            len(report.failures),
        )
        return report

    def delete_entry(self, path: Path) -> DeletionReport:
        """Remove a single non-directory entry such as a file or a link.

        Links are removed themselves, never their targets.

        Args:
            path: Entry to remove.

        Returns:
            DeletionReport counting the entry as one file.
        """
        if self._dry_run:
            logger.info("Dry-run: would delete file %s", path)
            return DeletionReport(root=path, files_deleted=1, directories_deleted=0, dry_run=True)

        failure = self._delete_single(path, EntryKind.FILE)
        return DeletionReport(
            root=path,
            files_deleted=0 if failure else 1,
            directories_deleted=0,
            failures=(failure,) if failure else (),
        )

    def _delete_files(self, files: tuple[Path, ...]) -> list[DeletionFailure]:
        """Delete files concurrently and wait for every task to finish.

        Leaving the executor context joins the pool, so no directory
        removal can start before the last file task has returned.

        Args:
            files: Files to delete.

        Returns:
            Failures, one per file that could not be removed.
        """
        if not files:
            return []

        workers = min(self._max_workers, len(files))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tree-delete") as pool:
            results = list(pool.map(self._delete_file, files))

        return [r for r in results if r is not None]

    def _delete_file(self, path: Path) -> DeletionFailure | None:
        return self._delete_single(path, EntryKind.FILE)

    def _delete_single(self, path: Path, kind: EntryKind) -> DeletionFailure | None:
        """Remove one path, isolating any failure.

        Args:
            path: Path to remove.
            kind: Whether path is a file or a directory.

        Returns:
            DeletionFailure if the removal failed, None on success.
        """
        remove = self._remove_dir if kind == EntryKind.DIRECTORY else self._remove_file
        try:
            remove(path)
        except OSError as e:
            logger.warning("Failed to delete %s %s: %s", kind.value, path.absolute(), e)
            return DeletionFailure(path=path, kind=kind, error=str(e))
        return None


def delete_tree(
    root: Path,
    keep_root: bool = False,
    *,
    max_workers: int | None = None,
) -> DeletionReport:
    """Delete a directory tree with a default TreeDeleter.

    Args:
        root: Directory to delete.
        keep_root: If True, keep root itself and remove its contents.
        max_workers: Worker pool size. None uses one worker per CPU.

    Returns:
        DeletionReport with counts and best-effort failures.

    Raises:
        TreeWalkError: If the tree cannot be walked.
    """
    return TreeDeleter(max_workers).delete(root, keep_root=keep_root)


def clear_dir(path: Path, *, max_workers: int | None = None) -> DeletionReport:
    """Remove every entry under path, keeping path itself.

    Raises:
        TreeWalkError: If the tree cannot be walked.
    """
    return TreeDeleter(max_workers).delete(path, keep_root=True)


def delete_dir_if_exists(
    path: Path,
    *,
    deleter: TreeDeleter | None = None,
) -> DeletionReport | None:
    """Delete a directory tree if it exists, never raising.

    A file or link found at path is removed on its own; a link is never
    followed.

    Args:
        path: Directory to delete.
        deleter: TreeDeleter to use. None creates a default one.

    Returns:
        DeletionReport, or None if nothing existed or the walk failed.
    """
    if not path.exists() and not path.is_symlink():
        return None

    deleter = deleter or TreeDeleter()
    if path.is_symlink() or not path.is_dir():
        return deleter.delete_entry(path)

    try:
        return deleter.delete(path)
    except TreeWalkError as e:
        logger.error("Failed to delete dir: %s (%s)", path.absolute(), e)
        return None
