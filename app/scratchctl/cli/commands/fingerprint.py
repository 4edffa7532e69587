"""Input fingerprint commands.

Provides commands to compute the fingerprint of a set of input paths
and to check it against a stored fingerprint to decide whether build
output can be reused.
"""

from pathlib import Path
from typing import Annotated

import typer

from scratchctl.core.config import load_config_or_default
from scratchctl.core.errors import ScratchError
from scratchctl.fingerprint.inputs import build_inputs_fingerprint
from scratchctl.fingerprint.store import is_reusable, load_fingerprint, save_fingerprint
from scratchctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Fingerprint build inputs.",
    invoke_without_command=True,
    no_args_is_help=True,
)

AlgorithmOption = Annotated[
    str | None,
    typer.Option(
        "--algorithm",
        "-a",
        help="Digest algorithm (default: from config, md5).",
    ),
]


@app.command()
def compute(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Input files and directories."),
    ],
    algorithm: AlgorithmOption = None,
) -> None:
    """Print the fingerprint of PATHS."""
    fingerprint = _compute(paths, algorithm)
    console.print(fingerprint, highlight=False)


@app.command()
def check(
    name: Annotated[
        str,
        typer.Argument(help="Name under which the fingerprint is stored."),
    ],
    paths: Annotated[
        list[Path],
        typer.Argument(help="Input files and directories."),
    ],
    algorithm: AlgorithmOption = None,
    update: Annotated[
        bool,
        typer.Option("--update", "-u", help="Store the new fingerprint when stale."),
    ] = False,
) -> None:
    """Check whether output built from PATHS under NAME is reusable.

    Exits 0 when the stored fingerprint matches, 1 when it is stale
    or missing.
    """
    fingerprint = _compute(paths, algorithm)

    try:
        if is_reusable(name, fingerprint):
            print_success(f"{name}: up to date ({fingerprint})")
            return
        stored = load_fingerprint(name)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e

    if stored is None:
        print_warning(f"{name}: no stored fingerprint")
    else:
        print_warning(f"{name}: stale (stored {stored}, current {fingerprint})")

    if update:
        try:
            path = save_fingerprint(name, fingerprint)
        except (OSError, ScratchError) as e:
            print_error(f"Could not store fingerprint: {e}")
            raise typer.Exit(code=2) from e
        print_info(f"Stored fingerprint at {path}")

    raise typer.Exit(code=1)


def _compute(paths: list[Path], algorithm: str | None) -> str:
    """Compute a fingerprint, turning failures into a CLI exit."""
    try:
        if algorithm is None:
            algorithm = load_config_or_default().hash_algorithm
        return build_inputs_fingerprint(paths, algorithm=algorithm)
    except ScratchError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e
