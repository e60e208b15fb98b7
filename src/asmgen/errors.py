"""
asmgen Error Hierarchy
======================

All exceptions raised by asmgen inherit from AsmGenError, so callers can
catch every tool-related failure with a single except clause.

Exception Hierarchy
-------------------
AsmGenError (base)
├── ConfigError - invalid configuration values
├── ToolchainError (external command failures)
│   ├── ToolNotFoundError - executable not on PATH
│   ├── CommandTimeoutError - command exceeded its timeout
│   └── CommandFailedError - command exited with non-zero status
└── RangeDiscoveryError (listing could not produce an index range)
    ├── NoEntriesError - no listing line matched the entry pattern
    └── EmptyRangeError - last index is below the start index

Copyright (c) 2026 cargo-asmgen Contributors
"""

from typing import Optional, Sequence


# =============================================================================
# Base Exception Class
# =============================================================================

class AsmGenError(Exception):
    """
    Base exception for all asmgen errors.

        try:
            generator.run()
        except AsmGenError as e:
            print(f"Error: {e}")
    """
    pass


class ConfigError(AsmGenError):
    """Invalid configuration value (negative start index, empty profile, ...)."""
    pass


# =============================================================================
# Toolchain Exceptions
# =============================================================================

class ToolchainError(AsmGenError):
    """
    Base exception for failures of an external toolchain command.

    Attributes:
        command: The argument vector that was executed
    """

    def __init__(self, message: str, command: Sequence[str] = ()):
        self.command = list(command)
        super().__init__(message)

    @property
    def command_line(self) -> str:
        """The command as a single shell-like string."""
        return " ".join(self.command)


class ToolNotFoundError(ToolchainError):
    """
    The executable could not be found.

    Usually means cargo is not installed or not on PATH, or that the
    cargo-show-asm subcommand (`cargo asm`) is missing.
    """

    def __init__(self, executable: str, command: Sequence[str] = ()):
        self.executable = executable
        super().__init__(
            f"'{executable}' not found - is the Rust toolchain installed?",
            command,
        )


class CommandTimeoutError(ToolchainError):
    """The command did not finish within the configured timeout."""

    def __init__(self, command: Sequence[str], timeout: float):
        self.timeout = timeout
        super().__init__(
            f"'{' '.join(command)}' timed out after {timeout:g}s",
            command,
        )


class CommandFailedError(ToolchainError):
    """
    The command exited with a non-zero status.

    The CLI propagates `returncode` as its own exit status.

    Attributes:
        returncode: Exit status of the failed command
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: Optional[str] = None,
        stderr: Optional[str] = None,
    ):
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        super().__init__(self._format_message(command), command)

    def _format_message(self, command: Sequence[str]) -> str:
        """
        Format the failure with the tail of stderr, if any.

        Example output:
            'cargo build --profile asm' failed with exit status 101
                error: profile `asm` is not defined
        """
        parts = [f"'{' '.join(command)}' failed with exit status {self.returncode}"]
        tail = self.stderr.strip().splitlines()[-5:]
        for line in tail:
            parts.append(f"    {line}")
        return "\n".join(parts)


# =============================================================================
# Range Discovery Exceptions
# =============================================================================

class RangeDiscoveryError(AsmGenError):
    """Base exception for listings that do not yield a usable index range."""
    pass


class NoEntriesError(RangeDiscoveryError):
    """
    No line of the listing matched the entry pattern.

    Typically the library exports no functions, or the listing command
    printed something other than an entry table.
    """

    def __init__(self, message: str = ""):
        super().__init__(
            message or "no disassembly entries found in 'cargo asm --lib' output"
        )


class EmptyRangeError(RangeDiscoveryError):
    """The last listed index is lower than the start index."""

    def __init__(self, start_index: int, last_index: int):
        self.start_index = start_index
        self.last_index = last_index
        super().__init__(
            f"last entry index {last_index} is below start index {start_index}; "
            f"nothing to extract"
        )
