"""
Toolchain Interface
===================

The generation pipeline talks to cargo only through the Toolchain interface,
so the orchestration can be exercised with canned text instead of a real
Rust project.

CargoToolchain is the real implementation. It runs, in the project
directory:

    cargo clean
    cargo build --profile <profile>
    cargo asm --lib                            (entry listing)
    cargo asm --profile <profile> --lib <N>    (one entry)

`cargo asm` is provided by the cargo-show-asm subcommand.

Copyright (c) 2026 cargo-asmgen Contributors
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

from asmgen.errors import CommandFailedError, CommandTimeoutError, ToolNotFoundError

logger = logging.getLogger(__name__)


# Bytes that are not valid UTF-8 round-trip through surrogates, so the
# output file receives exactly what cargo printed
OUTPUT_ENCODING = "utf-8"
OUTPUT_ERRORS = "surrogateescape"


def decode_output(data: bytes) -> str:
    """Decode raw command output, keeping undecodable bytes and CRLF endings."""
    return data.decode(OUTPUT_ENCODING, errors=OUTPUT_ERRORS)


class Toolchain(ABC):
    """External build, listing, and disassembly commands."""

    @abstractmethod
    def clean(self) -> None:
        """Remove previous build artifacts."""

    @abstractmethod
    def build(self, profile: str) -> None:
        """Build the library in the given profile."""

    @abstractmethod
    def list_entries(self) -> str:
        """Return the raw text listing of disassembly entries."""

    @abstractmethod
    def disassemble(self, profile: str, index: int) -> str:
        """Return the disassembly of one listing entry."""


class CargoToolchain(Toolchain):
    """
    Toolchain backed by cargo and cargo-show-asm.

    Args:
        cargo: Cargo executable name or path
        cwd: Project directory (where Cargo.toml lives)
        timeout: Per-command timeout in seconds, or None for no limit
    """

    def __init__(
        self,
        cargo: str = "cargo",
        cwd: Union[str, Path] = ".",
        timeout: Optional[float] = None,
    ):
        self.cargo = cargo
        self.cwd = Path(cwd)
        self.timeout = timeout

    def clean(self) -> None:
        self._run(["clean"])

    def build(self, profile: str) -> None:
        self._run(["build", "--profile", profile])

    def list_entries(self) -> str:
        return self._run(["asm", "--lib"])

    def disassemble(self, profile: str, index: int) -> str:
        return self._run(["asm", "--profile", profile, "--lib", str(index)])

    def _run(self, args: Sequence[str]) -> str:
        """
        Run a cargo subcommand and return its standard output.

        Raises:
            ToolNotFoundError: If the cargo executable is missing
            CommandTimeoutError: If the command exceeds the timeout
            CommandFailedError: If the command exits with non-zero status
        """
        cmd = [self.cargo, *args]
        logger.debug(f"Running: {' '.join(cmd)} (cwd={self.cwd})")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                cwd=str(self.cwd),
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ToolNotFoundError(self.cargo, cmd) from None
        except subprocess.TimeoutExpired:
            raise CommandTimeoutError(cmd, self.timeout) from None

        if result.returncode != 0:
            raise CommandFailedError(
                cmd,
                result.returncode,
                stdout=result.stdout.decode(OUTPUT_ENCODING, errors="replace"),
                stderr=result.stderr.decode(OUTPUT_ENCODING, errors="replace"),
            )

        return decode_output(result.stdout)
