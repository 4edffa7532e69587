"""Temporary workspace management.

This module provides the TempWorkspace handle and the process-wide
accessors built on it.
"""

from scratchctl.workspace.manager import (
    INSTANCE_PREFIX,
    TEMP_PREFIX,
    TempWorkspace,
    clear_root,
    create_workspace,
    ensure_root,
    get_workspace,
    list_instance_roots,
    new_instance_dir,
    new_named_file,
    new_temp_file,
    prune_instance_roots,
    reconfigure_root,
    reset_workspace,
    set_workspace,
)

__all__ = [
    "INSTANCE_PREFIX",
    "TEMP_PREFIX",
    "TempWorkspace",
    "clear_root",
    "create_workspace",
    "ensure_root",
    "get_workspace",
    "list_instance_roots",
    "new_instance_dir",
    "new_named_file",
    "new_temp_file",
    "prune_instance_roots",
    "reconfigure_root",
    "reset_workspace",
    "set_workspace",
]
