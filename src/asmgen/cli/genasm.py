"""
genasm - Assembly Dump Tool for Rust Libraries
==============================================

This module implements the command-line interface that rebuilds a Rust
library and collects the disassembly of its exported functions into one
file.

Pipeline
--------
    1. cargo clean && cargo build --profile asm
    2. cargo asm --lib                  → last listed index N
    3. cargo asm --profile asm --lib i  → appended to fns.asm, for i in 4..N
    4. Lines with .section/.globl/.p2align/.type removed from fns.asm

Usage Examples
--------------
Generate fns.asm in the current project:
    $ genasm

Another project directory and output file:
    $ genasm -C path/to/crate -o listing.asm

Skip `cargo clean` (faster, reuses previous artifacts):
    $ genasm --no-clean

Show what would be extracted without cleaning or extracting:
    $ genasm --dry-run

Exit Codes
----------
0 - Success
1 - Listing, configuration, or toolchain error
2 - Invalid arguments
3 - Internal error
A failed cargo command exits with cargo's own status instead.

Copyright (c) 2026 cargo-asmgen Contributors
"""

import logging
from pathlib import Path
from typing import Optional

import click

from asmgen import __version__
from asmgen.cli.errors import handle_cli_exception
from asmgen.config import GenConfig
from asmgen.listing import discover_range, parse_entries
from asmgen.pipeline import AsmGenerator
from asmgen.toolchain import CargoToolchain

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def build_config(
    project_dir: Path,
    output: Optional[Path],
    profile: Optional[str],
    start_index: Optional[int],
    clean: bool,
    cargo: Optional[str],
    timeout: Optional[float],
) -> GenConfig:
    """
    Build the run configuration: environment defaults, then CLI overrides.

    Options left unset on the command line keep the value from
    GenConfig.from_env().
    """
    config = GenConfig.from_env()
    config.project_dir = project_dir
    config.clean = clean

    if output is not None:
        config.output_file = output
    if profile is not None:
        config.profile = profile
    if start_index is not None:
        config.start_index = start_index
    if cargo is not None:
        config.cargo = cargo
    if timeout is not None:
        config.timeout = timeout

    config.validate()
    return config


def show_dry_run(config: GenConfig, toolchain: CargoToolchain) -> None:
    """List the entries that a full run would extract."""
    listing = toolchain.list_entries()
    indices = discover_range(listing, config.start_index)

    for entry in parse_entries(listing):
        if entry.index in indices:
            click.echo(str(entry))

    click.echo(
        f"Would extract {len(indices)} entries "
        f"({indices.start}..{indices[-1]}) to {config.output_path}"
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.option(
    "-C", "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Cargo project directory to build and disassemble",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file, relative to the project directory (default: fns.asm)",
)
@click.option(
    "-p", "--profile",
    type=str,
    default=None,
    help="Cargo profile for build and disassembly (default: asm)",
)
@click.option(
    "-s", "--start-index",
    type=click.IntRange(min=0),
    default=None,
    help="First listing index to extract (default: 4)",
)
@click.option(
    "--clean/--no-clean",
    default=True,
    help="Run `cargo clean` before building. Default: clean.",
)
@click.option(
    "--cargo",
    type=str,
    default=None,
    help="Cargo executable (default: cargo)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Timeout in seconds for each cargo command (default: none)",
)
@click.option(
    "-n", "--dry-run",
    is_flag=True,
    help="List the entries that would be extracted without cleaning or extracting",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show every cargo command and per-entry progress",
)
@click.version_option(version=__version__, prog_name="genasm")
def main(
    project_dir: Path,
    output: Optional[Path],
    profile: Optional[str],
    start_index: Optional[int],
    clean: bool,
    cargo: Optional[str],
    timeout: Optional[float],
    dry_run: bool,
    verbose: bool,
) -> None:
    """
    Rebuild a Rust library and dump the assembly of its functions.

    Runs `cargo build` in a dedicated profile, enumerates entries with
    `cargo asm --lib`, writes the disassembly of every entry from the
    start index to the last listed one into a single file, and strips
    assembler directive lines from the result.

    \b
    Examples:
        genasm                          # fns.asm in the current crate
        genasm -C mylib -o vec.asm      # Another crate and output file
        genasm --no-clean               # Keep previous build artifacts
        genasm -p release               # Use the release profile
        genasm -n                       # Show the entries only

    \b
    Environment:
        ASMGEN_PROFILE, ASMGEN_OUTPUT, ASMGEN_START_INDEX,
        ASMGEN_CARGO, ASMGEN_TIMEOUT provide defaults for the options above.
    """
    setup_logging(verbose)

    try:
        config = build_config(
            project_dir, output, profile, start_index, clean, cargo, timeout
        )
        toolchain = CargoToolchain(
            cargo=config.cargo,
            cwd=config.project_dir,
            timeout=config.timeout,
        )

        if dry_run:
            show_dry_run(config, toolchain)
            return

        def on_entry(index: int, written: int) -> None:
            if verbose:
                click.echo(f"  [{written}] entry {index}")

        generator = AsmGenerator(config, toolchain, on_entry=on_entry)
        result = generator.run()

        if verbose:
            click.echo(
                f"Extracted {result.entry_count} entries "
                f"({result.first_index}..{result.last_index}), "
                f"removed {result.lines_removed} directive lines"
            )

        click.echo(f"Assembly written to {result.output_file}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
