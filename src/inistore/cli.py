# src/inistore/cli.py
"""
inistore Command Line Interface (CLI).

A small `typer` + `rich` front-end for inspecting INI files with the same
resolution rules applications get from the library (DEFAULT fallback,
dotted sub-sections, `%(name)s` substitution).

Usage
-----
    # Print one resolved value
    $ inistore get conf/app.conf conf/local.conf -s db -k addr

    # Show every resolved key, optionally for one section
    $ inistore dump conf/app.conf --section db

    # Validate files (exit code 1 on the first malformed line)
    $ inistore check conf/app.conf
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from inistore.core.errors import InistoreError
from inistore.core.store import DEFAULT_SECTION, ConfigStore
from inistore.reader import load_config_file

# Settings such as LOG_LEVEL may live in a local .env file
load_dotenv()

app = typer.Typer(
    help="inistore: read INI configuration files with sections, variables and sub-sections.",
    rich_markup_mode="markdown",
)
console = Console()

FilesArg = Annotated[
    list[Path],
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="INI files, loaded in order (later files override earlier ones).",
    ),
]
VerboseOpt = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
]


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _load(files: list[Path], verbose: bool) -> ConfigStore:
    """Helper: Load `files` into a store, exiting with code 1 on failure."""
    try:
        return load_config_file(*files)
    except (InistoreError, OSError) as e:
        _fail("Load Error", e, verbose)


def _fail(title: str, exc: Exception, verbose: bool) -> NoReturn:
    """Helper: Print a red error line (and traceback if asked) and exit 1."""
    console.print(f"[bold red]❌ {title}:[/bold red] {escape(str(exc))}")
    if verbose:
        traceback.print_exc()
    raise typer.Exit(code=1) from exc


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def get(
    files: FilesArg,
    key: Annotated[str, typer.Option("--key", "-k", help="Key to resolve.")],
    section: Annotated[
        str,
        typer.Option("--section", "-s", help="Section name (blank = DEFAULT)."),
    ] = "",
    verbose: VerboseOpt = False,
) -> None:
    """Print the resolved value of one key."""
    store = _load(files, verbose)
    try:
        console.print(store.get_value(section, key), markup=False, highlight=False)
    except InistoreError as e:
        _fail("Lookup Error", e, verbose)


@app.command()  # type: ignore[misc]
def dump(
    files: FilesArg,
    section: Annotated[
        str | None,
        typer.Option("--section", "-s", help="Only show this section."),
    ] = None,
    verbose: VerboseOpt = False,
) -> None:
    """Show every section and resolved key as a table."""
    store = _load(files, verbose)
    sections = store.section_list() if section is None else [section or DEFAULT_SECTION]

    table = Table(title=", ".join(store.file_names), show_lines=False)
    table.add_column("Section", style="cyan")
    table.add_column("Key", style="yellow")
    table.add_column("Value")
    try:
        for name in sections:
            for k, v in store.get_section(name).items():
                table.add_row(escape(name), escape(k), escape(v))
    except InistoreError as e:
        _fail("Lookup Error", e, verbose)
    console.print(table)


@app.command()  # type: ignore[misc]
def check(files: FilesArg, verbose: VerboseOpt = False) -> None:
    """Parse the files and report section/key counts."""
    store = _load(files, verbose)
    sections = store.section_list()
    keys = sum(len(store.key_list(name)) for name in sections)
    console.print(
        Panel.fit(
            f"[bold green]✅ OK[/bold green]\n{len(files)} file(s), "
            f"{len(sections)} section(s), {keys} key(s)",
            title="inistore check",
            border_style="green",
        )
    )


if __name__ == "__main__":
    app()
