"""
Competition results composer

Builds the full placing of one event: points ascending, total weight
descending, draw position ascending. Participants without a draw position
have no points and are placed after everyone who does.
"""
import math
from dataclasses import replace
from typing import Any, List, Sequence, Tuple

from loguru import logger

from .models import Participant, ParticipantResult
from .sector_ranking import rank_within_sectors
from .sectors import resolve_sector, validate_sector_sizes
from .weighing import total_weight


def placing_sort_key(result: ParticipantResult) -> Tuple[float, int, float]:
    points = result.points if result.points is not None else math.inf
    place = result.place if result.place else math.inf
    return (points, -result.total_weight, place)


def compose_results(results: Sequence[ParticipantResult]) -> List[ParticipantResult]:
    """
    Order already-scored participants for display and number them 1..N

    Returns new results; points are never recomputed here.
    """
    ordered = sorted(results, key=placing_sort_key)
    return [replace(result, rank=rank) for rank, result in enumerate(ordered, 1)]


def calculate_results(
    participants: Sequence[Participant],
    sector_sizes: Sequence[int],
) -> List[ParticipantResult]:
    """
    Total weight, sector and points for every participant, in placing order

    Args:
        participants: participants of one event (confirmed or not, for preview)
        sector_sizes: ordered sector sizes

    Returns:
        ParticipantResult list ordered by compose_results
    """
    validate_sector_sizes(sector_sizes)

    weights = [total_weight(p.weights) for p in participants]
    ranks = rank_within_sectors(
        participants,
        lambda place: resolve_sector(place, sector_sizes),
        weights=weights,
    )

    results = [
        ParticipantResult(
            participant=p,
            sector=resolve_sector(p.place, sector_sizes),
            total_weight=weights[index],
            points=ranks[index],
        )
        for index, p in enumerate(participants)
    ]

    unplaced = sum(1 for r in results if r.points is None)
    if unplaced:
        logger.warning(f"{unplaced} participant(s) without draw position, not ranked")

    return compose_results(results)


def results_rows(results: Sequence[ParticipantResult]) -> List[List[Any]]:
    """Flat table for spreadsheet/PDF sinks; club/klasse columns only when used"""
    has_club = any(r.participant.club for r in results)
    has_klasse = any(r.participant.klasse for r in results)

    header: List[Any] = ["Ranking", "Sector", "Plaats", "Naam"]
    if has_club:
        header.append("Club")
    if has_klasse:
        header.append("Klasse")
    header.extend(["Gewicht", "Punten"])

    rows: List[List[Any]] = [header]
    for r in results:
        line: List[Any] = [r.rank, r.sector or "-", r.place or "-", r.name]
        if has_club:
            line.append(r.participant.club or "")
        if has_klasse:
            line.append(r.participant.klasse or "")
        line.extend([r.total_weight, r.points if r.points is not None else "-"])
        rows.append(line)
    return rows
