"""
Data pipeline package

Stored record schemas, normalization and pre-save validation.
"""

from .schemas import (
    ParticipantSchema,
    CompetitionDetailsSchema,
    SavedCompetitionSchema,
    CriteriumFolderSchema,
    ClubDetailsSchema,
    CalendarEventSchema,
    WeighingAccessLinkSchema,
    CompetitionType,
    ValidationResult,
    ValidationError,
    ValidationSeverity,
    default_sector_sizes,
)
from .normalizer import (
    row_to_competition,
    competition_to_row,
    clean_registration,
    results_to_participants,
    build_export,
    parse_export,
)
from .validators import EventValidator, find_place_holder, find_duplicate_name

__all__ = [
    # Schemas
    "ParticipantSchema",
    "CompetitionDetailsSchema",
    "SavedCompetitionSchema",
    "CriteriumFolderSchema",
    "ClubDetailsSchema",
    "CalendarEventSchema",
    "WeighingAccessLinkSchema",
    "CompetitionType",
    "ValidationResult",
    "ValidationError",
    "ValidationSeverity",
    "default_sector_sizes",
    # Normalizer
    "row_to_competition",
    "competition_to_row",
    "clean_registration",
    "results_to_participants",
    "build_export",
    "parse_export",
    # Validators
    "EventValidator",
    "find_place_holder",
    "find_duplicate_name",
]
