"""
Tests for listing parsing and range discovery
=============================================
"""

import pytest

from asmgen.errors import EmptyRangeError, NoEntriesError, RangeDiscoveryError
from asmgen.listing import (
    ListingEntry,
    discover_range,
    find_last_index,
    parse_entries,
)

from conftest import SAMPLE_LISTING


# =============================================================================
# Test Last Index Selection
# =============================================================================

class TestFindLastIndex:
    """Tests for find_last_index()."""

    def test_last_line_wins_not_maximum(self):
        """Should take the index from the last matching line, not the largest."""
        text = '  3 "a"\n  7 "b"\n  5 "c"\n'
        assert find_last_index(text) == 5

    def test_sample_listing(self):
        """Should find the final entry of a realistic listing."""
        assert find_last_index(SAMPLE_LISTING) == 6

    def test_no_leading_whitespace(self):
        """Leading whitespace is optional."""
        assert find_last_index('12 "foo"\n') == 12

    def test_ignores_non_matching_lines(self):
        """Lines without the '<int> "' shape are skipped."""
        text = (
            '  4 "vec3_sum_manual" [9]\n'
            "  Finished release profile\n"
            "  9 items\n"
            '  10\t"tab separated"\n'
            "note: 99 \"in a note\"\n"
        )
        assert find_last_index(text) == 4

    def test_requires_single_space_before_quote(self):
        """Two spaces between the index and the quote do not match."""
        assert find_last_index('  8  "x"\n') is None

    def test_no_match_returns_none(self):
        """Should return None when nothing matches."""
        assert find_last_index("") is None
        assert find_last_index("error: could not find Cargo.toml\n") is None


# =============================================================================
# Test Entry Parsing
# =============================================================================

class TestParseEntries:
    """Tests for parse_entries()."""

    def test_parses_indices_and_names_in_order(self):
        entries = parse_entries(SAMPLE_LISTING)
        assert [e.index for e in entries] == [0, 1, 2, 3, 4, 5, 6]
        assert entries[4] == ListingEntry(index=4, name="vec3_sum_manual")
        assert entries[1].name == "core::ptr::drop_in_place<alloc::string::String>"

    def test_keeps_listing_order(self):
        """Out-of-order listings are not sorted."""
        entries = parse_entries('  3 "a"\n  7 "b"\n  5 "c"\n')
        assert [e.index for e in entries] == [3, 7, 5]

    def test_unterminated_name(self):
        """An entry without a closing quote still counts, with an empty name."""
        entries = parse_entries('  2 "broken\n')
        assert entries == [ListingEntry(index=2, name="")]

    def test_str_format(self):
        assert str(ListingEntry(index=4, name="foo")) == "    4 foo"


# =============================================================================
# Test Range Discovery
# =============================================================================

class TestDiscoverRange:
    """Tests for discover_range()."""

    def test_inclusive_range_from_start(self):
        indices = discover_range(SAMPLE_LISTING, 4)
        assert list(indices) == [4, 5, 6]

    def test_single_entry_range(self):
        assert list(discover_range('  4 "only"\n', 4)) == [4]

    def test_no_entries_fails_fast(self):
        """Should raise a clear error instead of looping or crashing."""
        with pytest.raises(NoEntriesError, match="no disassembly entries"):
            discover_range("nothing here\n", 4)

    def test_zero_upper_bound_fails(self):
        """A last index of 0 is below the start index."""
        with pytest.raises(EmptyRangeError) as excinfo:
            discover_range('  0 "main"\n', 4)
        assert excinfo.value.last_index == 0
        assert excinfo.value.start_index == 4

    def test_errors_share_base_class(self):
        with pytest.raises(RangeDiscoveryError):
            discover_range("", 4)
