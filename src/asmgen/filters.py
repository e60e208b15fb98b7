"""
Directive Post-Filter
=====================

Removes assembler directive lines (section, symbol visibility, alignment and
type declarations) from the accumulated disassembly. These lines depend on
the build rather than on the generated instructions.

Matching is a literal substring test per line. The file is rewritten
atomically: the filtered text goes to `<file>.tmp`, which then replaces the
original.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Tuple

from asmgen.toolchain import OUTPUT_ENCODING, OUTPUT_ERRORS

logger = logging.getLogger(__name__)


DEFAULT_DIRECTIVES: Tuple[str, ...] = (".section", ".globl", ".p2align", ".type")


def is_directive_line(line: str, directives: Iterable[str] = DEFAULT_DIRECTIVES) -> bool:
    """Return True if the line contains any of the directive substrings."""
    return any(directive in line for directive in directives)


def filter_directives(
    text: str,
    directives: Iterable[str] = DEFAULT_DIRECTIVES,
) -> Tuple[str, int]:
    """
    Drop every line containing a directive substring.

    All other lines are kept byte for byte, including their line endings.

    Args:
        text: Raw accumulated disassembly
        directives: Substrings marking lines to remove

    Returns:
        (filtered text, number of lines removed)

    Example:
        >>> filter_directives('\\t.globl\\tfoo\\nfoo:\\n\\tret\\n')
        ('foo:\\n\\tret\\n', 1)
    """
    directives = tuple(directives)
    kept = []
    removed = 0

    # Split on "\n" only, the way grep does; "\r" stays part of the line
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]

    for line in lines:
        if not line:
            continue
        if is_directive_line(line, directives):
            removed += 1
        else:
            kept.append(line)

    return "".join(kept), removed


def filter_file(path: Path, directives: Iterable[str] = DEFAULT_DIRECTIVES) -> int:
    """
    Filter a file in place through a temporary file and rename.

    Args:
        path: File to rewrite
        directives: Substrings marking lines to remove

    Returns:
        Number of lines removed

    Raises:
        OSError: If the file cannot be read or the result cannot be written
    """
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")

    with open(path, "r", encoding=OUTPUT_ENCODING, errors=OUTPUT_ERRORS, newline="") as f:
        text = f.read()

    filtered, removed = filter_directives(text, directives)

    try:
        with open(tmp_path, "w", encoding=OUTPUT_ENCODING, errors=OUTPUT_ERRORS, newline="") as f:
            f.write(filtered)
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug(f"Filtered {path}: removed {removed} directive lines")
    return removed
