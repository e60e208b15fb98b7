"""
asmgen - Assembly Dumps for Rust Libraries
==========================================

This package rebuilds a Rust library in a dedicated cargo profile and
collects the disassembly of its functions into a single file, with
build-specific assembler directives stripped. It drives `cargo build` and
the cargo-show-asm subcommand (`cargo asm`); it does not disassemble
anything itself.

Main Components
---------------
- **toolchain**: Toolchain interface and the cargo-backed implementation
- **listing**: Parses the `cargo asm --lib` entry table into an index range
- **pipeline**: AsmGenerator, the build → list → extract → filter sequence
- **filters**: Directive line removal with atomic file rewrite
- **config**: GenConfig settings

Quick Start
-----------
    >>> from pathlib import Path
    >>> from asmgen import AsmGenerator, CargoToolchain, GenConfig
    >>> config = GenConfig(project_dir=Path("mylib"))
    >>> toolchain = CargoToolchain(cwd=config.project_dir)
    >>> result = AsmGenerator(config, toolchain).run()
    >>> print(result.output_file)

Or use the command-line tool:
    $ genasm -C mylib

Copyright (c) 2026 cargo-asmgen Contributors
"""

__version__ = "1.0.0"

from asmgen.config import GenConfig
from asmgen.errors import (
    AsmGenError,
    ConfigError,
    ToolchainError,
    ToolNotFoundError,
    CommandTimeoutError,
    CommandFailedError,
    RangeDiscoveryError,
    NoEntriesError,
    EmptyRangeError,
)
from asmgen.filters import DEFAULT_DIRECTIVES, filter_directives, filter_file
from asmgen.listing import ListingEntry, discover_range, find_last_index, parse_entries
from asmgen.pipeline import AsmGenerator, GenerationResult
from asmgen.toolchain import CargoToolchain, Toolchain

__all__ = [
    "__version__",
    # Configuration
    "GenConfig",
    # Pipeline
    "AsmGenerator",
    "GenerationResult",
    # Toolchain
    "Toolchain",
    "CargoToolchain",
    # Listing
    "ListingEntry",
    "parse_entries",
    "find_last_index",
    "discover_range",
    # Filtering
    "DEFAULT_DIRECTIVES",
    "filter_directives",
    "filter_file",
    # Exception hierarchy
    "AsmGenError",
    "ConfigError",
    "ToolchainError",
    "ToolNotFoundError",
    "CommandTimeoutError",
    "CommandFailedError",
    "RangeDiscoveryError",
    "NoEntriesError",
    "EmptyRangeError",
]
