"""
Sector resolver tests
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from ranking.sectors import (
    resolve_sector,
    sector_label,
    sector_labels,
    sector_ranges,
    total_capacity,
    validate_sector_sizes,
)


class TestResolveSector:
    """Draw position -> sector label"""

    def test_two_equal_sectors(self):
        assert resolve_sector(1, [2, 2]) == "A"
        assert resolve_sector(2, [2, 2]) == "A"
        assert resolve_sector(3, [2, 2]) == "B"
        assert resolve_sector(4, [2, 2]) == "B"

    def test_uneven_sectors(self):
        sizes = [3, 1, 5]
        assert resolve_sector(3, sizes) == "A"
        assert resolve_sector(4, sizes) == "B"
        assert resolve_sector(5, sizes) == "C"
        assert resolve_sector(9, sizes) == "C"

    def test_default_single_sector(self):
        assert resolve_sector(1, [10]) == "A"
        assert resolve_sector(10, [10]) == "A"

    def test_missing_position(self):
        """0 / None -> empty"""
        assert resolve_sector(0, [2, 2]) == ""
        assert resolve_sector(None, [2, 2]) == ""

    def test_beyond_capacity(self):
        assert resolve_sector(5, [2, 2]) == ""
        assert resolve_sector(11, [10]) == ""

    def test_no_sectors(self):
        assert resolve_sector(1, []) == ""

    def test_monotonic_within_capacity(self):
        """A later draw position never lands in an earlier sector"""
        sizes = [4, 1, 3, 2, 6]
        labels = [resolve_sector(p, sizes) for p in range(1, total_capacity(sizes) + 1)]
        assert labels == sorted(labels)
        assert "" not in labels


class TestSectorLayout:
    """Labels, ranges and size validation"""

    def test_labels(self):
        assert sector_label(0) == "A"
        assert sector_label(25) == "Z"
        assert sector_labels([10, 10, 5]) == ["A", "B", "C"]

    def test_ranges(self):
        assert sector_ranges([3, 2]) == [("A", 1, 3), ("B", 4, 5)]

    def test_capacity(self):
        assert total_capacity([3, 2]) == 5
        assert total_capacity([]) == 0

    def test_valid_sizes(self):
        validate_sector_sizes([10, 1])

    @pytest.mark.parametrize("sizes", [[0], [2, -1], [None]])
    def test_invalid_sizes(self, sizes):
        with pytest.raises(ValueError):
            validate_sector_sizes(sizes)
