"""
asmgen - Configuration
======================

Generation settings. Everything the pipeline needs (working directory,
output file, profile, range start, filter list) lives here and is passed
explicitly rather than read from ambient shell state.

Configuration can come from:
- Default values (defined here)
- Environment variables (GenConfig.from_env)
- Command-line options (applied by the genasm CLI on top of from_env)

Copyright (c) 2026 cargo-asmgen Contributors
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import os

from asmgen.errors import ConfigError
from asmgen.filters import DEFAULT_DIRECTIVES


DEFAULT_OUTPUT_FILE = "fns.asm"
DEFAULT_PROFILE = "asm"
DEFAULT_START_INDEX = 4

# `echo -e "\n\n"` writes two escaped newlines plus its own trailing one
DEFAULT_SEPARATOR = "\n\n\n"


@dataclass
class GenConfig:
    """
    Configuration for one assembly generation run.

    Attributes:
        project_dir: Directory every cargo command runs in
        output_file: Output file; relative paths resolve against project_dir
        profile: Cargo build profile used for build and disassembly
        start_index: First listing index to extract (inclusive)
        directives: Line substrings removed from the final output
        separator: Text appended after each extracted entry
        clean: Run `cargo clean` before building
        cargo: Cargo executable name or path
        timeout: Per-command timeout in seconds (None: no limit)
    """

    project_dir: Path = field(default_factory=lambda: Path("."))
    output_file: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_FILE))
    profile: str = DEFAULT_PROFILE
    start_index: int = DEFAULT_START_INDEX
    directives: Tuple[str, ...] = DEFAULT_DIRECTIVES
    separator: str = DEFAULT_SEPARATOR
    clean: bool = True
    cargo: str = "cargo"
    timeout: Optional[float] = None

    @property
    def output_path(self) -> Path:
        """Output file resolved against the project directory."""
        return self.project_dir / self.output_file

    def validate(self) -> None:
        """
        Check values that would otherwise fail later in a confusing way.

        Raises:
            ConfigError: On a negative start index, empty profile, or
                non-positive timeout
        """
        if self.start_index < 0:
            raise ConfigError(f"start index must be >= 0, got {self.start_index}")
        if not self.profile:
            raise ConfigError("build profile must not be empty")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout:g}")

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls) -> "GenConfig":
        """
        Create GenConfig from environment variables.

        Environment variables (all optional):
            ASMGEN_PROFILE: Build profile (e.g., "asm", "release")
            ASMGEN_OUTPUT: Output file
            ASMGEN_START_INDEX: First index to extract (integer)
            ASMGEN_CARGO: Cargo executable
            ASMGEN_TIMEOUT: Per-command timeout in seconds

        Returns:
            GenConfig with values from environment variables
        """
        config = cls()

        if profile := os.environ.get("ASMGEN_PROFILE"):
            config.profile = profile

        if output := os.environ.get("ASMGEN_OUTPUT"):
            config.output_file = Path(output)

        if start := os.environ.get("ASMGEN_START_INDEX"):
            try:
                config.start_index = int(start)
            except ValueError:
                pass  # Ignore invalid values

        if cargo := os.environ.get("ASMGEN_CARGO"):
            config.cargo = cargo

        if timeout := os.environ.get("ASMGEN_TIMEOUT"):
            try:
                config.timeout = float(timeout)
            except ValueError:
                pass

        return config
