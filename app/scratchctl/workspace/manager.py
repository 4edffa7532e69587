"""Temporary workspace lifecycle management.

A TempWorkspace owns one temp root directory at a time. Instance
directories and temp files are created as uniquely named children of
that root and registered for best-effort removal when the workspace is
torn down, either explicitly or at interpreter exit.

Workspace structure:
    <base_dir>/
        scratchctl-instance-XXXX/     -- temp root
            <prefix>XXXX/             -- create_instance_dir()
            scratchctl-tmp-XXXX<sfx>  -- create_temp_file()
            <name>                    -- create_named_file()
"""

from __future__ import annotations

import atexit
import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from scratchctl.core.errors import RuntimeCreationError, TreeWalkError
from scratchctl.core.files import ensure_dir
from scratchctl.core.paths import get_system_temp_dir, resolve_temp_base_dir
from scratchctl.tree.deleter import TreeDeleter, delete_dir_if_exists
from scratchctl.tree.walker import walk_tree

if TYPE_CHECKING:
    from types import TracebackType

    from scratchctl.core.config import ScratchConfig
    from scratchctl.tree.models import DeletionReport

logger = logging.getLogger(__name__)

INSTANCE_PREFIX = "scratchctl-instance-"
TEMP_PREFIX = "scratchctl-tmp-"
PERSIST_PREFIX = "scratchctl-persist-"


class TempWorkspace:
    """Lock-guarded owner of a temp root directory.

    The root is created lazily on first use. reconfigure() swaps it for a
    new root under another base directory; the old root is left in
    place but stays registered for teardown.

    Attributes:
        _base_dir: Directory under which the root is created.
        _deleter: Deletion engine used for clearing and teardown.
        _root: Current temp root, None until first use.
        _registered: Paths to remove at teardown, in registration order.
    """

    def __init__(
        self,
        base_dir: Path | None = None,
        *,
        deleter: TreeDeleter | None = None,
        register_exit: bool = True,
    ) -> None:
        """Initialize the TempWorkspace.

        Args:
            base_dir: Directory for the temp root. None uses the platform
                temp directory.
            deleter: Deletion engine. None creates a default TreeDeleter.
            register_exit: If True, run cleanup() at interpreter exit.
        """
        self._base_dir = base_dir if base_dir is not None else get_system_temp_dir()
        self._deleter = deleter if deleter is not None else TreeDeleter()
        self._lock = threading.RLock()
        self._root: Path | None = None
        self._registered: list[Path] = []
        self._closed = False
        self._exit_registered = register_exit
        if register_exit:
            atexit.register(self.cleanup)

    def __enter__(self) -> TempWorkspace:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def root(self) -> Path:
        """Current temp root, created on first access.

        Raises:
            RuntimeCreationError: If the root cannot be created.
        """
        return self.ensure_root()

    @property
    def base_dir(self) -> Path:
        """Directory under which the current root was (or will be) created."""
        with self._lock:
            return self._base_dir

    @property
    def is_initialized(self) -> bool:
        """True once a temp root exists."""
        with self._lock:
            return self._root is not None

    @property
    def registered_paths(self) -> tuple[Path, ...]:
        """Paths scheduled for removal at teardown."""
        with self._lock:
            return tuple(self._registered)

    def ensure_root(self) -> Path:
        """Return the temp root, creating it if needed.

        Returns:
            Path to the temp root directory.

        Raises:
            RuntimeCreationError: If the root cannot be created.
        """
        with self._lock:
            self._check_open()
            if self._root is None:
                self._root = self._create_root(self._base_dir)
                logger.debug("Created temp root %s", self._root)
            return self._root

    def reconfigure(self, new_base_dir: Path) -> Path:
        """Replace the temp root with a new one under new_base_dir.

        The previous root is not deleted; it remains registered for
        teardown.

        Args:
            new_base_dir: Base directory for the new root, created if absent.

        Returns:
            Path to the new temp root.

        Raises:
            RuntimeCreationError: If the new root cannot be created.
        """
        with self._lock:
            self._check_open()
            new_root = self._create_root(new_base_dir)
            old_root = self._root
            self._base_dir = new_base_dir
            self._root = new_root
        logger.debug("Temp root changed from %s to %s", old_root, new_root)
        return new_root

    def create_instance_dir(self, prefix: str) -> Path:
        """Create a uniquely named directory under the temp root.

        Args:
            prefix: Directory name prefix.

        Returns:
            Path to the new directory.

        Raises:
            RuntimeCreationError: If the directory cannot be created.
        """
        with self._lock:
            root = self.ensure_root()
            try:
                path = Path(tempfile.mkdtemp(prefix=prefix, dir=root))
            except OSError as e:
                msg = f"Failed to create temp directory with prefix {prefix!r}: {e}"
                raise RuntimeCreationError(msg) from e
            self._register(path)
        return path

    def create_temp_file(self, suffix: str = "") -> Path:
        """Create a uniquely named empty file under the temp root.

        Args:
            suffix: File name suffix (e.g. ".json").

        Returns:
            Path to the new file.

        Raises:
            RuntimeCreationError: If the file cannot be created.
        """
        with self._lock:
            root = self.ensure_root()
            try:
                fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=suffix, dir=root)
                os.close(fd)
            except OSError as e:
                msg = f"Failed to create temp file with suffix {suffix!r}: {e}"
                raise RuntimeCreationError(msg) from e
            path = Path(name)
            self._register(path)
        return path

    def create_named_file(self, name: str) -> Path:
        """Create an empty file with an exact name under the temp root.

        Args:
            name: File name. Must not already exist in the root.

        Returns:
            Path to the new file.

        Raises:
            RuntimeCreationError: If the name is invalid, taken, or the
                file cannot be created.
        """
        if not name or Path(name).name != name or name in (".", ".."):
            msg = f"Invalid temp file name: {name!r}"
            raise RuntimeCreationError(msg)

        with self._lock:
            path = self.ensure_root() / name
            try:
                path.touch(exist_ok=False)
            except OSError as e:
                msg = f"Failed to create non-prefixed temp file {name!r}: {e}"
                raise RuntimeCreationError(msg) from e
            self._register(path)
        return path

    def create_persistent_file(self, suffix: str = "") -> Path:
        """Create a temp file that survives workspace teardown.

        The file lives in its own directory under the platform temp
        directory, outside the temp root, and is never registered.

        Args:
            suffix: File name suffix.

        Returns:
            Path to the new file.

        Raises:
            RuntimeCreationError: If the file cannot be created.
        """
        try:
            directory = tempfile.mkdtemp(prefix=PERSIST_PREFIX, dir=get_system_temp_dir())
            fd, name = tempfile.mkstemp(prefix="scratchctl-", suffix=suffix, dir=directory)
            os.close(fd)
        except OSError as e:
            msg = f"Failed to create persistent temp file with suffix {suffix!r}: {e}"
            raise RuntimeCreationError(msg) from e
        return Path(name)

    def clear_root(self) -> DeletionReport | None:
        """Delete everything under the temp root, keeping the root itself.

        Never raises: failures are logged.

        Returns:
            DeletionReport, or None if there is no root or the walk failed.
        """
        with self._lock:
            root = self._root
        if root is None or not root.is_dir():
            return None
        try:
            report = self._deleter.delete(root, keep_root=True)
        except TreeWalkError as e:
            logger.error("Failed to clear temp root %s: %s", root, e)
            return None
        self._forget_removed(root)
        return report

    def delete_dir_if_exists(self, path: Path) -> DeletionReport | None:
        """Delete a directory tree if it exists, never raising.

        Args:
            path: Directory to delete.

        Returns:
            DeletionReport, or None if nothing was deleted.
        """
        return delete_dir_if_exists(path, deleter=self._deleter)

    def cleanup(self) -> None:
        """Remove every registered path, newest first.

        Best-effort and idempotent. Registered with atexit unless the
        workspace was created with register_exit=False.
        """
        with self._lock:
            paths = list(reversed(self._registered))
            self._registered.clear()

        for path in paths:
            try:
                if path.is_dir() and not path.is_symlink():
                    delete_dir_if_exists(path, deleter=self._deleter)
                elif path.exists() or path.is_symlink():
                    path.unlink()
            except OSError as e:
                logger.warning("Failed to remove temp path %s: %s", path, e)

    def close(self) -> None:
        """Tear down the workspace and detach it from interpreter exit."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._root = None
        self.cleanup()
        if self._exit_registered:
            atexit.unregister(self.cleanup)

    def snapshot(self) -> dict[str, object]:
        """Describe the workspace state for display.

        Returns:
            Dictionary with root, base_dir, registered count and, when the
            root exists, its file and directory counts.
        """
        with self._lock:
            root = self._root
            info: dict[str, object] = {
                "base_dir": str(self._base_dir),
                "root": str(root) if root is not None else None,
                "registered": len(self._registered),
            }
        if root is not None and root.is_dir():
            walk = walk_tree(root, follow_symlinks=False)
            info["files"] = len(walk.files)
            info["directories"] = len(walk.directories) - 1
        return info

    def _create_root(self, base_dir: Path) -> Path:
        """Create and register a new uniquely named root under base_dir."""
        ensure_dir(base_dir, "temp base")
        try:
            root = Path(tempfile.mkdtemp(prefix=INSTANCE_PREFIX, dir=base_dir))
        except OSError as e:
            msg = f"Failed to create temp root directory in {base_dir}: {e}"
            raise RuntimeCreationError(msg) from e
        self._register(root)
        return root

    def _check_open(self) -> None:
        if self._closed:
            msg = "Temp workspace is closed"
            raise RuntimeCreationError(msg)

    def _register(self, path: Path) -> None:
        with self._lock:
            self._registered.append(path)

    def _forget_removed(self, root: Path) -> None:
        """Drop registrations below root whose paths are gone."""
        with self._lock:
            self._registered = [
                p
                for p in self._registered
                if p == root or root not in p.parents or p.exists() or p.is_symlink()
            ]


def list_instance_roots(base_dir: Path) -> list[Path]:
    """List temp roots under base_dir, newest first.

    Roots left behind by processes that did not exit cleanly show up
    here alongside live ones.

    Args:
        base_dir: Directory in which temp roots are created.

    Returns:
        Temp root directories sorted by modification time, newest first.
    """
    if not base_dir.is_dir():
        return []

    roots: list[tuple[float, Path]] = []
    for entry in base_dir.iterdir():
        if not entry.name.startswith(INSTANCE_PREFIX):
            continue
        try:
            if entry.is_dir() and not entry.is_symlink():
                roots.append((entry.stat().st_mtime, entry))
        except OSError:
            logger.warning("Cannot inspect temp root candidate: %s", entry)
    return [path for _, path in sorted(roots, key=lambda r: (r[0], r[1].name), reverse=True)]


def prune_instance_roots(
    base_dir: Path,
    *,
    exclude: Path | None = None,
    older_than: float | None = None,
    deleter: TreeDeleter | None = None,
) -> list[DeletionReport]:
    """Delete abandoned temp roots under base_dir.

    Args:
        base_dir: Directory in which temp roots are created.
        exclude: A root to leave alone (usually the live one).
        older_than: Only delete roots not modified for this many seconds.
        deleter: Deletion engine. None creates a default TreeDeleter.

    Returns:
        One DeletionReport per root that could be walked.
    """
    reports: list[DeletionReport] = []
    for root in list_instance_roots(base_dir):
        if exclude is not None and root == exclude:
            continue
        if older_than is not None and not _is_older_than(root, older_than):
            continue
        report = delete_dir_if_exists(root, deleter=deleter)
        if report is not None:
            reports.append(report)
    return reports


def _is_older_than(path: Path, seconds: float) -> bool:
    try:
        return time.time() - path.stat().st_mtime >= seconds
    except OSError:
        return False


# =============================================================================
# Process-wide workspace
# =============================================================================

_default_workspace: TempWorkspace | None = None
_default_lock = threading.Lock()


def create_workspace(config: ScratchConfig | None = None) -> TempWorkspace:
    """Build a TempWorkspace from configuration.

    Args:
        config: Settings to apply. None loads the config file (or defaults).

    Returns:
        A new, not yet initialized TempWorkspace.
    """
    if config is None:
        from scratchctl.core.config import load_config_or_default

        config = load_config_or_default()

    return TempWorkspace(
        resolve_temp_base_dir(config.temp_base_dir),
        deleter=TreeDeleter(config.max_workers),
        register_exit=config.cleanup_on_exit,
    )


def get_workspace() -> TempWorkspace:
    """Get the process-wide workspace, creating it on first use."""
    global _default_workspace
    with _default_lock:
        if _default_workspace is None:
            _default_workspace = create_workspace()
        return _default_workspace


def set_workspace(workspace: TempWorkspace | None) -> TempWorkspace | None:
    """Install a workspace as the process-wide one.

    Args:
        workspace: Workspace to install, or None to forget the current one.

    Returns:
        The previously installed workspace (not closed).
    """
    global _default_workspace
    with _default_lock:
        previous = _default_workspace
        _default_workspace = workspace
        return previous


def reset_workspace() -> None:
    """Tear down and forget the process-wide workspace."""
    previous = set_workspace(None)
    if previous is not None:
        previous.close()


def ensure_root() -> Path:
    """Temp root of the process-wide workspace."""
    return get_workspace().ensure_root()


def reconfigure_root(base_dir: Path) -> Path:
    """Swap the process-wide temp root for a new one under base_dir."""
    return get_workspace().reconfigure(base_dir)


def new_instance_dir(prefix: str) -> Path:
    """Create a unique directory in the process-wide temp root."""
    return get_workspace().create_instance_dir(prefix)


def new_temp_file(suffix: str = "") -> Path:
    """Create a unique file in the process-wide temp root."""
    return get_workspace().create_temp_file(suffix)


def new_named_file(name: str) -> Path:
    """Create an exactly named file in the process-wide temp root."""
    return get_workspace().create_named_file(name)


def clear_root() -> DeletionReport | None:
    """Empty the process-wide temp root, keeping the root itself."""
    return get_workspace().clear_root()
