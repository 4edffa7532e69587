"""CLI package for scratchctl.

This package contains the Typer application and all subcommands.
"""

from scratchctl.cli.main import app

__all__ = ["app"]
