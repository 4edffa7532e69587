"""Temp workspace maintenance commands.

Temp roots are removed when their process exits; roots of processes
that were killed stay behind. These commands show and prune them.
"""

import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from scratchctl.core.config import ScratchConfig, load_config_or_default
from scratchctl.core.errors import ScratchError
from scratchctl.core.paths import resolve_temp_base_dir
from scratchctl.tree.deleter import TreeDeleter
from scratchctl.utils.formatting import (
    console,
    format_count,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from scratchctl.workspace.manager import list_instance_roots, prune_instance_roots

app = typer.Typer(
    help="Inspect and prune temp workspaces.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def info() -> None:
    """Show where temp roots are created and how many exist."""
    config = _load_config()
    base_dir = resolve_temp_base_dir(config.temp_base_dir)
    roots = list_instance_roots(base_dir)

    table = Table(title="Temp Workspace", show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Base directory", str(base_dir))
    table.add_row("Temp roots", str(len(roots)))
    table.add_row("Workers", str(config.max_workers or "auto"))
    table.add_row("Hash algorithm", config.hash_algorithm)
    table.add_row("Cleanup on exit", "yes" if config.cleanup_on_exit else "no")
    console.print(table)


@app.command("list")
def list_roots() -> None:
    """List temp roots under the base directory, newest first."""
    base_dir = resolve_temp_base_dir(_load_config().temp_base_dir)
    roots = list_instance_roots(base_dir)
    if not roots:
        print_info(f"No temp roots under {base_dir}.")
        return

    table = Table(title=f"Temp Roots in {base_dir}", show_lines=False)
    table.add_column("Root", style="bold")
    table.add_column("Modified", style="dim")
    for root in roots:
        try:
            mtime = datetime.fromtimestamp(root.stat().st_mtime, tz=UTC).isoformat()
        except OSError:
            mtime = "-"
        table.add_row(root.name, mtime)
    console.print(table)


@app.command()
def prune(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    min_age: Annotated[
        float,
        typer.Option(
            "--min-age",
            min=0,
            help="Only prune roots untouched for this many minutes.",
        ),
    ] = 60.0,
) -> None:
    """Delete temp roots left behind under the base directory.

    Roots of running processes are usually recent, so only roots older
    than --min-age minutes are pruned.
    """
    config = _load_config()
    base_dir = resolve_temp_base_dir(config.temp_base_dir)
    cutoff = time.time() - min_age * 60
    roots = [r for r in list_instance_roots(base_dir) if _mtime(r) <= cutoff]
    if not roots:
        print_info(f"No prunable temp roots under {base_dir}.")
        return

    for root in roots:
        console.print(f"  {root}", highlight=False)

    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nDelete {format_count(len(roots), 'temp root')}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    reports = prune_instance_roots(
        base_dir,
        older_than=min_age * 60,
        deleter=TreeDeleter(config.max_workers, dry_run=dry_run),
    )

    if dry_run:
        print_info(f"Dry-run: {format_count(len(reports), 'temp root')} would be deleted.")
        return

    failed = [r for r in reports if not r.success]
    deleted = len(reports) - len(failed)
    if failed or len(reports) < len(roots):
        print_warning(f"Deleted {format_count(deleted, 'temp root')}, some paths remain")
        raise typer.Exit(code=1)
    print_success(f"Deleted {format_count(deleted, 'temp root')}.")


def _mtime(path: Path) -> float:
    try:
        return path.stat().st_mtime
    except OSError:
        return time.time()


def _load_config() -> ScratchConfig:
    """Load the config file, turning failures into a CLI exit."""
    try:
        return load_config_or_default()
    except ScratchError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
