"""
Listing Parser (Range Discovery)
================================

`cargo asm --lib` without an index prints a numbered table of the items it
can disassemble, one per line:

       0 "<&T as core::fmt::Debug>::fmt" [25]
       1 "core::ptr::drop_in_place<alloc::string::String>" [6]
       ...
      12 "vec3_sum_trait" [17]

A line is an entry when it starts with optional whitespace, an integer, a
single space, and a double quote. The upper bound of the extraction range is
the integer on the LAST matching line. This is an order-dependent rule, not a
maximum: for entries listed as 3, 7, 5 the upper bound is 5.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from asmgen.errors import EmptyRangeError, NoEntriesError

logger = logging.getLogger(__name__)


ENTRY_PATTERN = re.compile(r'^\s*([0-9]+) "')

# Quoted item name following the index; names may contain escaped quotes
_NAME_PATTERN = re.compile(r'^\s*[0-9]+ "((?:[^"\\]|\\.)*)"')


@dataclass(frozen=True)
class ListingEntry:
    """
    One disassembly entry from the listing.

    Attributes:
        index: Number accepted by `cargo asm --lib <index>`
        name: Item name as printed in the listing ("" if unterminated)
    """
    index: int
    name: str

    def __str__(self) -> str:
        return f"{self.index:>5} {self.name}"


def parse_entries(text: str) -> list[ListingEntry]:
    """
    Parse every entry line of a listing, in output order.

    Non-matching lines (build noise, headers, warnings) are skipped.
    """
    entries = []
    for line in text.splitlines():
        match = ENTRY_PATTERN.match(line)
        if not match:
            continue
        name_match = _NAME_PATTERN.match(line)
        name = name_match.group(1) if name_match else ""
        entries.append(ListingEntry(index=int(match.group(1)), name=name))
    return entries


def find_last_index(text: str) -> Optional[int]:
    """
    Return the index on the last matching line, or None if no line matches.

    Example:
        >>> find_last_index('  3 "a"\\n  7 "b"\\n  5 "c"\\n')
        5
    """
    last = None
    for line in text.splitlines():
        match = ENTRY_PATTERN.match(line)
        if match:
            last = int(match.group(1))
    return last


def discover_range(text: str, start_index: int) -> range:
    """
    Compute the inclusive index range to extract from a listing.

    Args:
        text: Output of the listing command
        start_index: Fixed lower bound of the range

    Returns:
        range(start_index, last_index + 1)

    Raises:
        NoEntriesError: If no line matches the entry pattern
        EmptyRangeError: If the last index is below start_index
    """
    last_index = find_last_index(text)
    if last_index is None:
        raise NoEntriesError()
    if last_index < start_index:
        raise EmptyRangeError(start_index, last_index)

    logger.debug(f"Entry range: {start_index}..{last_index}")
    return range(start_index, last_index + 1)
