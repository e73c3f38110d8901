"""
Criterium standings

Merges the finalized events of one criterium folder into a season table:
- every name seen in any event gets a row
- a missing event scores the penalty points with zero weight
- the worst `exclude_count` results per participant are dropped,
  absences first, then present results by points desc / weight asc
- rows ordered by total points asc, total weight desc
"""
import re
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from .models import CompetitionResult, EventResult, Standings, StandingsRow


DEFAULT_PENALTY_POINTS = 20
DEFAULT_EXCLUDE_COUNT = 0
NO_KLASSE = "-"

_COMPETITION_NUMBER_RE = re.compile(r"^\s*W?\s*(\d+)")

T = TypeVar("T")


# =====================================================
# Folder ordering
# =====================================================

def competition_number(name: str) -> Optional[int]:
    """'W3' -> 3; None when the name carries no sequence number"""
    match = _COMPETITION_NUMBER_RE.match(name or "")
    return int(match.group(1)) if match else None


def competition_label(number: int) -> str:
    return f"W{number}"


def order_by_competition_number(items: Sequence[T], name_of) -> List[T]:
    """Sort folder events by their W-number; unnumbered names go last in input order"""
    def key(indexed: Tuple[int, T]):
        index, item = indexed
        number = competition_number(name_of(item))
        return (number is None, number or 0, index)

    return [item for _, item in sorted(enumerate(items), key=key)]


# =====================================================
# Exclusion
# =====================================================

def select_exclusions(results: Sequence[CompetitionResult], exclude_count: int) -> List[int]:
    """
    Indices of the results to drop for one participant

    Absences are dropped first; remaining drops go to the present results
    with the most points, lower weight first among equal points.
    """
    if exclude_count <= 0:
        return []

    absent = [i for i, r in enumerate(results) if not r.present]
    present = sorted(
        (i for i, r in enumerate(results) if r.present),
        key=lambda i: (-results[i].points, results[i].weight, i),
    )

    remaining = max(0, exclude_count - len(absent))
    return absent[:exclude_count] + present[:remaining]


def standings_sort_key(row: StandingsRow) -> Tuple[int, int]:
    return (row.total_points, -row.total_weight)


# =====================================================
# Aggregation
# =====================================================

def calculate_standings(
    events: Sequence[EventResult],
    penalty_points: int = DEFAULT_PENALTY_POINTS,
    exclude_count: int = DEFAULT_EXCLUDE_COUNT,
) -> Standings:
    """
    Criterium standings over the given events (already in folder order)

    Args:
        events: finalized event result sets of one folder
        penalty_points: points scored for an absence
        exclude_count: number of worst results dropped per participant

    Returns:
        Standings with rows in final ranking order
    """
    if penalty_points < 0:
        raise ValueError(f"penalty_points must be >= 0: {penalty_points}")
    if exclude_count < 0:
        raise ValueError(f"exclude_count must be >= 0: {exclude_count}")

    event_count = len(events)
    rows: Dict[str, StandingsRow] = {}

    # all names, first appearance wins for klasse
    for event in events:
        for entry in event.participants:
            if not entry.name or entry.name in rows:
                continue
            rows[entry.name] = StandingsRow(
                name=entry.name,
                klasse=entry.klasse or NO_KLASSE,
                competitions=[
                    CompetitionResult(points=penalty_points, weight=0, present=False)
                    for _ in range(event_count)
                ],
            )

    # present results
    for index, event in enumerate(events):
        for entry in event.participants:
            if not entry.name:
                continue
            # unranked (no draw position) scores like an absence
            points = entry.points if entry.points is not None else penalty_points
            rows[entry.name].competitions[index] = CompetitionResult(
                points=points,
                weight=entry.total_weight,
                present=True,
            )

    for row in rows.values():
        excluded = set(select_exclusions(row.competitions, exclude_count))
        for index, comp in enumerate(row.competitions):
            comp.excluded = index in excluded

        row.total_points = sum(
            (comp.points if comp.present else penalty_points)
            for comp in row.competitions
            if not comp.excluded
        )
        row.total_weight = sum(comp.weight for comp in row.competitions if not comp.excluded)

    ordered = sorted(rows.values(), key=standings_sort_key)
    for rank, row in enumerate(ordered, 1):
        row.current_rank = rank

    logger.debug(
        f"Criterium standings: {len(ordered)} participants over {event_count} events "
        f"(penalty={penalty_points}, exclude={exclude_count})"
    )

    return Standings(
        event_labels=[event.label for event in events],
        participants=ordered,
        penalty_points=penalty_points,
        exclude_count=exclude_count,
    )
