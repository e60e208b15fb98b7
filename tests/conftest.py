"""
Shared test fixtures
====================

FakeToolchain stands in for cargo: it returns canned listing and
disassembly text and records every call, so the pipeline can be tested
without a Rust project.
"""

from pathlib import Path

import pytest

from asmgen.config import GenConfig
from asmgen.errors import CommandFailedError
from asmgen.toolchain import Toolchain


# A listing in the shape printed by `cargo asm --lib`
SAMPLE_LISTING = """\
    Finished `dev` profile [unoptimized + debuginfo] target(s) in 0.02s
     0 "<&T as core::fmt::Debug>::fmt" [25]
     1 "core::ptr::drop_in_place<alloc::string::String>" [6]
     2 "core::fmt::Write::write_fmt" [12]
     3 "alloc::raw_vec::finish_grow" [40]
     4 "vec3_sum_manual" [9]
     5 "vec3_sum_trait" [9]
     6 "vec3_min_manual" [14]
"""


def sample_disassembly(index: int) -> str:
    """Per-entry output with directive lines mixed into the instructions."""
    return (
        f'\t.section\t.text.entry_{index},"ax",@progbits\n'
        f"\t.globl\tentry_{index}\n"
        f"\t.p2align\t4\n"
        f"\t.type\tentry_{index},@function\n"
        f"entry_{index}:\n"
        f"\tmov eax, {index}\n"
        f"\tret\n"
    )


class FakeToolchain(Toolchain):
    """Toolchain returning canned text and recording calls."""

    def __init__(self, listing: str = SAMPLE_LISTING, fail_on_index: int = None):
        self.listing = listing
        self.fail_on_index = fail_on_index
        self.calls: list[tuple] = []

    def clean(self) -> None:
        self.calls.append(("clean",))

    def build(self, profile: str) -> None:
        self.calls.append(("build", profile))

    def list_entries(self) -> str:
        self.calls.append(("list_entries",))
        return self.listing

    def disassemble(self, profile: str, index: int) -> str:
        self.calls.append(("disassemble", profile, index))
        if index == self.fail_on_index:
            raise CommandFailedError(
                ["cargo", "asm", "--profile", profile, "--lib", str(index)],
                101,
                stderr="error: no such item",
            )
        return sample_disassembly(index)

    @property
    def disassembled_indices(self) -> list[int]:
        return [call[2] for call in self.calls if call[0] == "disassemble"]


@pytest.fixture
def fake_toolchain() -> FakeToolchain:
    """Fixture: FakeToolchain with the sample listing."""
    return FakeToolchain()


@pytest.fixture
def gen_config(tmp_path: Path) -> GenConfig:
    """Fixture: GenConfig writing into a temporary project directory."""
    return GenConfig(project_dir=tmp_path)
