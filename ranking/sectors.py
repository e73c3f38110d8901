"""
Sector resolver

Sector i (labelled 'A' + i) covers draw positions
(sum(sizes[:i]), sum(sizes[:i + 1])].
"""
from typing import List, Optional, Sequence, Tuple


DEFAULT_SECTOR_SIZE = 10


def sector_label(index: int) -> str:
    """0-based sector index -> 'A', 'B', ..."""
    return chr(ord("A") + index)


def sector_labels(sector_sizes: Sequence[int]) -> List[str]:
    return [sector_label(i) for i in range(len(sector_sizes))]


def validate_sector_sizes(sector_sizes: Sequence[int]) -> None:
    for size in sector_sizes:
        if size is None or size <= 0:
            raise ValueError(f"Sector sizes must be positive integers: {list(sector_sizes)}")


def resolve_sector(place: Optional[int], sector_sizes: Sequence[int]) -> str:
    """
    Sector label for a draw position

    Args:
        place: draw position (1-based)
        sector_sizes: ordered sector sizes

    Returns:
        'A', 'B', ... or '' when place is missing, zero or beyond the last sector
    """
    if not place or place < 0:
        return ""

    boundary = 0
    for index, size in enumerate(sector_sizes):
        boundary += size
        if place <= boundary:
            return sector_label(index)
    return ""


def sector_ranges(sector_sizes: Sequence[int]) -> List[Tuple[str, int, int]]:
    """(label, first place, last place) per sector"""
    ranges = []
    boundary = 0
    for index, size in enumerate(sector_sizes):
        ranges.append((sector_label(index), boundary + 1, boundary + size))
        boundary += size
    return ranges


def total_capacity(sector_sizes: Sequence[int]) -> int:
    return sum(sector_sizes)
