"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from typing_extensions import Annotated

from .. import api
from ..core.errors import NewtError
from .parsers import parse_assignments, parse_overwrite

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="newt",
    help="Create new projects from templates.",
    no_args_is_help=True,
)

NameOption = Annotated[
    str,
    typer.Option(
        "--name",
        "-n",
        help="Project name, e.g. acme/widget or com.acme.widget.",
        metavar="NAME",
    ),
]
SrcDirsOption = Annotated[
    Optional[list[Path]],
    typer.Option(
        "--src-dir",
        help="Directory searched for templates before installed ones. Repeatable.",
        metavar="DIR",
    ),
]
TargetDirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--target-dir",
        "-t",
        help="Directory to create (default: the artifact part of the name).",
        metavar="DIR",
    ),
]
OverwriteOption = Annotated[
    str,
    typer.Option(
        "--overwrite",
        help="none/false: refuse an existing target; true: write into it; delete: remove it first.",
        metavar="POLICY",
    ),
]
SetOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--set",
        "-s",
        help="Extra placeholder value, e.g. --set license=MIT. Repeatable.",
        metavar="KEY=VALUE",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
]


def _run(
    entry: Callable[..., Path],
    verbose: bool,
    assignments: Optional[list[str]],
    **options: Any,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    options = {**parse_assignments(assignments), **options}
    options["overwrite"] = parse_overwrite(options.get("overwrite"))
    options["src_dirs"] = options.get("src_dirs") or []
    logger.debug(f"Running {entry.__name__} with {options}")

    try:
        entry(options)
    except NewtError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1) from e


@app.command()
def create(
    template: Annotated[
        str,
        typer.Option(
            "--template",
            help="Template identifier, e.g. app or acme.templates/service.",
            metavar="TEMPLATE",
        ),
    ],
    name: NameOption,
    src_dirs: SrcDirsOption = None,
    target_dir: TargetDirOption = None,
    overwrite: OverwriteOption = "none",
    assignments: SetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Create a project from any template."""
    _run(
        api.create,
        verbose,
        assignments,
        template=template,
        name=name,
        src_dirs=src_dirs,
        target_dir=target_dir,
        overwrite=overwrite,
    )


@app.command("app")
def app_command(
    name: NameOption,
    target_dir: TargetDirOption = None,
    overwrite: OverwriteOption = "none",
    assignments: SetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Create an application project."""
    _run(api.app, verbose, assignments, name=name, target_dir=target_dir, overwrite=overwrite)


@app.command("lib")
def lib_command(
    name: NameOption,
    target_dir: TargetDirOption = None,
    overwrite: OverwriteOption = "none",
    assignments: SetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Create a library project."""
    _run(api.lib, verbose, assignments, name=name, target_dir=target_dir, overwrite=overwrite)


@app.command("scratch")
def scratch_command(
    name: NameOption,
    target_dir: TargetDirOption = None,
    overwrite: OverwriteOption = "none",
    assignments: SetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Create a minimal scratch project."""
    _run(api.scratch, verbose, assignments, name=name, target_dir=target_dir, overwrite=overwrite)


@app.command("template")
def template_command(
    name: NameOption,
    target_dir: TargetDirOption = None,
    overwrite: OverwriteOption = "none",
    assignments: SetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Create a new template project."""
    _run(api.template, verbose, assignments, name=name, target_dir=target_dir, overwrite=overwrite)


@app.command("pyproject")
def pyproject_command(
    name: NameOption,
    target_dir: TargetDirOption = None,
    overwrite: OverwriteOption = "true",
    assignments: SetOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Write a pyproject.toml into an existing directory."""
    _run(api.pyproject, verbose, assignments, name=name, target_dir=target_dir, overwrite=overwrite)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
