"""
Generation Pipeline
===================

Sequential orchestration of one assembly dump:

    ┌───────────┐     ┌────────────┐     ┌────────────┐     ┌────────────┐
    │   clean   │────▶│  listing   │────▶│ extraction │────▶│ post-filter│
    │ + build   │     │ (range)    │     │   loop     │     │ (atomic)   │
    └───────────┘     └────────────┘     └────────────┘     └────────────┘

Every step blocks until its command completes. Any failure stops the
pipeline and propagates; nothing is retried. A failure inside the
extraction loop leaves the partially written, unfiltered output on disk.

The output file is emptied right after the build, so a failed listing
leaves an empty file rather than the previous result. Re-running on
unchanged inputs produces a byte-identical file.

Copyright (c) 2026 cargo-asmgen Contributors
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from asmgen.config import GenConfig
from asmgen.filters import filter_file
from asmgen.listing import discover_range
from asmgen.toolchain import OUTPUT_ENCODING, OUTPUT_ERRORS, Toolchain

logger = logging.getLogger(__name__)


# Called after each entry is written, with (index, entries written so far)
ProgressCallback = Callable[[int, int], None]


@dataclass
class GenerationResult:
    """
    Summary of a completed generation run.

    Attributes:
        output_file: Path of the written file
        first_index: First extracted index
        last_index: Last extracted index
        entry_count: Number of entries extracted
        lines_removed: Directive lines removed by the post-filter
    """
    output_file: Path
    first_index: int
    last_index: int
    entry_count: int
    lines_removed: int


class AsmGenerator:
    """
    Runs the clean/build, listing, extraction, and filter steps.

    Example:
        config = GenConfig(project_dir=Path("mylib"))
        toolchain = CargoToolchain(cwd=config.project_dir)
        result = AsmGenerator(config, toolchain).run()
    """

    def __init__(
        self,
        config: GenConfig,
        toolchain: Toolchain,
        on_entry: Optional[ProgressCallback] = None,
    ):
        self.config = config
        self.toolchain = toolchain
        self.on_entry = on_entry

    def build(self) -> None:
        """Clean (if configured) and rebuild in the configured profile."""
        if self.config.clean:
            logger.info("Cleaning previous build")
            self.toolchain.clean()
        logger.info(f"Building profile '{self.config.profile}'")
        self.toolchain.build(self.config.profile)

    def discover(self) -> range:
        """
        Query the entry listing and compute the index range to extract.

        Raises:
            NoEntriesError: If the listing has no entry lines
            EmptyRangeError: If the last entry is below the start index
        """
        listing = self.toolchain.list_entries()
        indices = discover_range(listing, self.config.start_index)
        logger.info(
            f"Found entries {indices.start}..{indices[-1]} ({len(indices)} to extract)"
        )
        return indices

    def reset_output(self) -> None:
        """Empty the output file so a failed run never leaves a stale result."""
        self.config.output_path.write_bytes(b"")

    def extract(self, indices: range) -> int:
        """
        Write the disassembly of each index, in order, to the output file.

        The file is truncated first. Each entry is followed by the
        configured separator.

        Returns:
            Number of entries written
        """
        output = self.config.output_path
        written = 0

        with open(output, "w", encoding=OUTPUT_ENCODING, errors=OUTPUT_ERRORS, newline="") as f:
            for index in indices:
                logger.debug(f"Disassembling entry {index}")
                text = self.toolchain.disassemble(self.config.profile, index)
                f.write(text)
                f.write(self.config.separator)
                written += 1
                if self.on_entry is not None:
                    self.on_entry(index, written)

        return written

    def run(self) -> GenerationResult:
        """
        Run the full pipeline.

        Returns:
            GenerationResult describing the written file

        Raises:
            ConfigError: If the configuration is invalid
            ToolchainError: If any external command fails
            RangeDiscoveryError: If the listing yields no usable range
        """
        self.config.validate()

        self.build()
        self.reset_output()
        indices = self.discover()
        count = self.extract(indices)

        output = self.config.output_path
        removed = filter_file(output, self.config.directives)
        logger.info(f"Removed {removed} directive lines")

        return GenerationResult(
            output_file=output,
            first_index=indices.start,
            last_index=indices[-1],
            entry_count=count,
            lines_removed=removed,
        )
