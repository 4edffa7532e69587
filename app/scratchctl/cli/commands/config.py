"""Configuration commands.

Provides commands to show, create and change the scratchctl config file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from scratchctl.core.config import (
    ScratchConfig,
    load_config,
    load_config_or_default,
    save_config,
)
from scratchctl.core.errors import ConfigError, ConfigNotFoundError
from scratchctl.core.paths import get_config_path
from scratchctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and edit configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config_path = get_config_path()
    try:
        config = load_config()
        source = str(config_path)
    except ConfigNotFoundError:
        config = ScratchConfig()
        source = "defaults (no config file)"
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(title="scratchctl Configuration", show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("source", source)
    table.add_row("temp_base_dir", str(config.temp_base_dir or "(system temp dir)"))
    table.add_row("max_workers", str(config.max_workers or "auto"))
    table.add_row("hash_algorithm", config.hash_algorithm)
    table.add_row("cleanup_on_exit", str(config.cleanup_on_exit).lower())
    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_info(f"Config already exists: {config_path} (use --force to overwrite)")
        return

    try:
        path = save_config(ScratchConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {path}")


@app.command("set")
def set_value(
    temp_base_dir: Annotated[
        Path | None,
        typer.Option("--temp-base-dir", help="Directory for temp roots."),
    ] = None,
    max_workers: Annotated[
        int | None,
        typer.Option("--max-workers", help="File-deletion worker count (1-256)."),
    ] = None,
    hash_algorithm: Annotated[
        str | None,
        typer.Option("--hash-algorithm", help="Digest algorithm for fingerprints."),
    ] = None,
    cleanup_on_exit: Annotated[
        bool | None,
        typer.Option(
            "--cleanup-on-exit/--no-cleanup-on-exit",
            help="Remove temp roots at process exit.",
        ),
    ] = None,
) -> None:
    """Change configuration values."""
    updates: dict[str, object] = {}
    if temp_base_dir is not None:
        updates["temp_base_dir"] = temp_base_dir.expanduser().absolute()
    if max_workers is not None:
        updates["max_workers"] = max_workers
    if hash_algorithm is not None:
        updates["hash_algorithm"] = hash_algorithm
    if cleanup_on_exit is not None:
        updates["cleanup_on_exit"] = cleanup_on_exit

    if not updates:
        print_info("Nothing to change.")
        return

    try:
        current = load_config_or_default()
        config = ScratchConfig.model_validate({**current.model_dump(), **updates})
        path = save_config(config)
    except (ConfigError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config updated: {path}")
