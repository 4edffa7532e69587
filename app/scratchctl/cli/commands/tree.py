"""Directory tree listing and deletion commands.

Provides commands to show how a tree would be walked and to delete
a tree with the parallel deletion engine.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from scratchctl.core.errors import ScratchError
from scratchctl.tree.deleter import TreeDeleter
from scratchctl.tree.models import DeletionReport, TreeWalkResult
from scratchctl.tree.walker import walk_tree
from scratchctl.utils.formatting import (
    console,
    create_path_table,
    format_count,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Walk and delete directory trees.",
    invoke_without_command=True,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for tree listing."""

    TABLE = "table"
    JSON = "json"


@app.command("list")
def list_tree(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to walk."),
    ],
    no_follow: Annotated[
        bool,
        typer.Option("--no-follow", help="Do not follow symbolic links."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List files and directories under PATH (directories in post-order)."""
    try:
        walk = walk_tree(path, follow_symlinks=not no_follow)
    except ScratchError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        _print_walk_json(walk)
        return

    _print_walk_table(walk)
    files = format_count(len(walk.files), "file")
    dirs = format_count(len(walk.directories), "directory", "directories")
    console.print(f"\n[dim]{files}, {dirs}[/dim]")


@app.command()
def delete(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to delete."),
    ],
    keep_root: Annotated[
        bool,
        typer.Option("--keep-root", help="Delete the contents but keep PATH itself."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            help="File-deletion worker count (default: one per CPU).",
        ),
    ] = None,
) -> None:
    """Delete the directory tree at PATH."""
    if not path.exists():
        print_info(f"Nothing to delete: {path} does not exist.")
        return

    # Confirm unless --yes or --dry-run
    if not dry_run and not yes:
        target = f"the contents of {path}" if keep_root else str(path)
        confirmed = typer.confirm(f"Delete {target}?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    deleter = TreeDeleter(workers, dry_run=dry_run)
    try:
        report = deleter.delete(path, keep_root=keep_root)
    except ScratchError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    _print_report(report)

    # Exit with error if any deletion failed
    if not report.success:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _print_walk_table(walk: TreeWalkResult) -> None:
    """Display a walk as a Rich table."""
    table = create_path_table(f"Tree of {walk.root}")
    for file in sorted(walk.files):
        table.add_row(str(file), "file")
    for directory in walk.directories:
        table.add_row(str(directory), "directory")
    console.print(table)


def _print_walk_json(walk: TreeWalkResult) -> None:
    """Display a walk as JSON."""
    data = {
        "root": str(walk.root),
        "files": sorted(str(f) for f in walk.files),
        "directories": [str(d) for d in walk.directories],
    }
    console.print(json.dumps(data, indent=2), soft_wrap=True, highlight=False)


def _print_report(report: DeletionReport) -> None:
    """Display deletion results."""
    if report.failures:
        table = Table(title="Deletion Failures", show_lines=False)
        table.add_column("Path", style="bold", overflow="fold")
        table.add_column("Kind", width=10)
        table.add_column("Details", style="dim")
        for failure in report.failures:
            table.add_row(str(failure.path), failure.kind.value, failure.error)
        console.print(table)

    files = format_count(report.files_deleted, "file")
    dirs = format_count(report.directories_deleted, "directory", "directories")

    if report.dry_run:
        print_info(f"Dry-run: {files} and {dirs} would be deleted.")
    elif report.failures:
        print_warning(f"Deleted {files} and {dirs}, {len(report.failures)} failed")
    else:
        print_success(f"Deleted {files} and {dirs}.")
