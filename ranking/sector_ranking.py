"""
Sector ranking

Within each sector participants are ordered by total weight (heaviest first);
equal weights go to the lower draw position. The 1-based position in that
order is the participant's points for the event. Every sector has its own
rank 1.
"""
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from .models import Participant
from .sectors import resolve_sector
from .weighing import total_weight


def sector_sort_key(weight: int, place: int, order: int) -> Tuple[int, int, int]:
    """Heaviest first, then lowest draw position, then input order"""
    return (-weight, place, order)


def rank_within_sectors(
    participants: Sequence[Participant],
    sector_of: Callable[[int], str],
    weights: Optional[Sequence[int]] = None,
) -> List[Optional[int]]:
    """
    Points (sector rank) per participant, aligned with the input

    Args:
        participants: participants of one event
        sector_of: draw position -> sector label
        weights: precomputed total weight per participant, same order (optional)

    Returns:
        rank per input position; None for participants without a draw position
    """
    groups: Dict[str, List[Tuple[int, int, int]]] = defaultdict(list)

    for order, participant in enumerate(participants):
        if not participant.place:
            continue
        weight = weights[order] if weights is not None else total_weight(participant.weights)
        groups[sector_of(participant.place)].append(sector_sort_key(weight, participant.place, order))

    ranks: List[Optional[int]] = [None] * len(participants)
    for sector, members in groups.items():
        members.sort()
        for position, (_, _, order) in enumerate(members, 1):
            ranks[order] = position
        logger.debug(f"Sector {sector or '-'}: {len(members)} ranked")

    return ranks


def rank_by_sector_sizes(
    participants: Sequence[Participant],
    sector_sizes: Sequence[int],
) -> List[Optional[int]]:
    """rank_within_sectors with the standard sector layout"""
    return rank_within_sectors(participants, lambda place: resolve_sector(place, sector_sizes))
