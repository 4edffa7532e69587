"""Directory tree walking and bulk deletion.

This module provides the post-order tree walker and the deletion
engine built on top of it.
"""

from scratchctl.tree.deleter import TreeDeleter, clear_dir, delete_dir_if_exists, delete_tree
from scratchctl.tree.models import DeletionFailure, DeletionReport, EntryKind, TreeWalkResult
from scratchctl.tree.walker import walk_tree

__all__ = [
    "DeletionFailure",
    "DeletionReport",
    "EntryKind",
    "TreeDeleter",
    "TreeWalkResult",
    "clear_dir",
    "delete_dir_if_exists",
    "delete_tree",
    "walk_tree",
]
