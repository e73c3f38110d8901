"""
Fishing competition ranking

Sector points per event and cumulative criterium standings.
"""
from .models import (
    Participant,
    ParticipantResult,
    EventEntry,
    EventResult,
    CompetitionResult,
    StandingsRow,
    Standings,
)
from .sectors import (
    resolve_sector,
    sector_label,
    sector_labels,
    sector_ranges,
    validate_sector_sizes,
    DEFAULT_SECTOR_SIZE,
)
from .weighing import (
    total_weight,
    confirm_weighing,
    unconfirm_weighing,
    unconfirmed_participants,
    is_ready_to_save,
)
from .sector_ranking import rank_within_sectors, rank_by_sector_sizes
from .results import calculate_results, compose_results, results_rows
from .criterium import (
    calculate_standings,
    select_exclusions,
    competition_number,
    competition_label,
    order_by_competition_number,
    DEFAULT_PENALTY_POINTS,
    DEFAULT_EXCLUDE_COUNT,
)

__all__ = [
    "Participant",
    "ParticipantResult",
    "EventEntry",
    "EventResult",
    "CompetitionResult",
    "StandingsRow",
    "Standings",
    "resolve_sector",
    "sector_label",
    "sector_labels",
    "sector_ranges",
    "validate_sector_sizes",
    "DEFAULT_SECTOR_SIZE",
    "total_weight",
    "confirm_weighing",
    "unconfirm_weighing",
    "unconfirmed_participants",
    "is_ready_to_save",
    "rank_within_sectors",
    "rank_by_sector_sizes",
    "calculate_results",
    "compose_results",
    "results_rows",
    "calculate_standings",
    "select_exclusions",
    "competition_number",
    "competition_label",
    "order_by_competition_number",
    "DEFAULT_PENALTY_POINTS",
    "DEFAULT_EXCLUDE_COUNT",
]
