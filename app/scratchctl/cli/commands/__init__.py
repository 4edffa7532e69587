"""CLI commands for scratchctl.

This package contains all subcommand implementations.
"""

from scratchctl.cli.commands import config, fingerprint, tree, workspace

__all__ = ["config", "fingerprint", "tree", "workspace"]
