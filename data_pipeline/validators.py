"""
Event validation

Checks run before each save of a competition:
- details: name/location/folder
- registration: named participants, unique names
- placement: every participant placed, unique draw positions, sector sizes
- weigh-in: no negative weights, every weigh-in confirmed
"""

from typing import List, Dict, Optional, Sequence
from loguru import logger

from ranking.sectors import total_capacity
from .normalizer import name_key
from .schemas import (
    CompetitionDetailsSchema,
    CompetitionType,
    ParticipantSchema,
    SavedCompetitionSchema,
    ValidationResult,
    ValidationError,
    ValidationSeverity,
    KLASSE_OPTIONS,
)


def find_place_holder(
    participants: Sequence[ParticipantSchema],
    place: int,
    participant_id: int,
) -> Optional[str]:
    """Name of another participant already holding this draw position"""
    for p in participants:
        if p.place == place and p.id != participant_id:
            return p.name
    return None


def find_duplicate_name(
    participants: Sequence[ParticipantSchema],
    name: str,
    participant_id: int,
) -> Optional[str]:
    """Name of another participant with the same name (case-insensitive)"""
    key = name_key(name)
    if not key:
        return None
    for p in participants:
        if p.id != participant_id and name_key(p.name) == key:
            return p.name
    return None


def _result(errors: List[ValidationError], warnings: List[ValidationError]) -> ValidationResult:
    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


class EventValidator:
    """
    Validation of one competition through its lifecycle

    Every method returns a ValidationResult; nothing raises.
    """

    def validate_details(self, details: CompetitionDetailsSchema) -> ValidationResult:
        errors = []
        competition_type = CompetitionType(details.type)

        if not competition_type.is_criterium and not details.name:
            errors.append(ValidationError(
                error_type="NAME_REQUIRED",
                severity=ValidationSeverity.CRITICAL,
                message="Competition name is required",
                field="name",
            ))

        if not details.location:
            errors.append(ValidationError(
                error_type="LOCATION_REQUIRED",
                severity=ValidationSeverity.CRITICAL,
                message="Location is required",
                field="location",
            ))

        if competition_type.is_criterium and not details.criterium_folder_id:
            errors.append(ValidationError(
                error_type="FOLDER_REQUIRED",
                severity=ValidationSeverity.CRITICAL,
                message="Select a criterium folder",
                field="criterium_folder_id",
            ))

        return _result(errors, [])

    def validate_registration(self, participants: Sequence[ParticipantSchema]) -> ValidationResult:
        errors = []
        warnings = []

        named = [p for p in participants if p.name]
        if not named:
            errors.append(ValidationError(
                error_type="NO_PARTICIPANTS",
                severity=ValidationSeverity.CRITICAL,
                message="Add at least one participant with a name",
                field="participants",
            ))

        ids: Dict[int, str] = {}
        for p in participants:
            if p.id in ids:
                errors.append(ValidationError(
                    error_type="DUPLICATE_ID",
                    severity=ValidationSeverity.HIGH,
                    message=f"Participant number {p.id} is used by both \"{ids[p.id]}\" and \"{p.name}\"",
                    field="id",
                    value=p.id,
                    suggestion="Renumber the registration",
                ))
            else:
                ids[p.id] = p.name

        seen: Dict[str, str] = {}
        for p in named:
            key = name_key(p.name)
            if key in seen:
                errors.append(ValidationError(
                    error_type="DUPLICATE_NAME",
                    severity=ValidationSeverity.HIGH,
                    message=f"The name \"{p.name}\" is already assigned to another participant",
                    field="name",
                    value=p.name,
                    suggestion=f"Conflicts with \"{seen[key]}\"",
                ))
            else:
                seen[key] = p.name

            if p.klasse and p.klasse not in KLASSE_OPTIONS:
                warnings.append(ValidationError(
                    error_type="UNKNOWN_KLASSE",
                    severity=ValidationSeverity.LOW,
                    message=f"Unknown class \"{p.klasse}\" for {p.name}",
                    field="klasse",
                    value=p.klasse,
                    suggestion=", ".join(KLASSE_OPTIONS),
                ))

        return _result(errors, warnings)

    def validate_placement(
        self,
        participants: Sequence[ParticipantSchema],
        sector_sizes: Sequence[Optional[int]],
    ) -> ValidationResult:
        errors = []
        warnings = []

        unplaced = [p for p in participants if not p.place]
        if unplaced:
            errors.append(ValidationError(
                error_type="MISSING_PLACE",
                severity=ValidationSeverity.HIGH,
                message=f"Not all participants have a draw position. {unplaced[0].name} has no number yet.",
                field="place",
                value=unplaced[0].id,
            ))

        holders: Dict[int, str] = {}
        for p in participants:
            if not p.place:
                continue
            if p.place in holders:
                errors.append(ValidationError(
                    error_type="DUPLICATE_PLACE",
                    severity=ValidationSeverity.HIGH,
                    message=f"Draw position {p.place} is already assigned to {holders[p.place]}",
                    field="place",
                    value=p.place,
                ))
            else:
                holders[p.place] = p.name

        if not sector_sizes or any(size is None or size <= 0 for size in sector_sizes):
            errors.append(ValidationError(
                error_type="INVALID_SECTOR_SIZE",
                severity=ValidationSeverity.CRITICAL,
                message="Enter a valid number of participants for every sector",
                field="sector_sizes",
                value=list(sector_sizes or []),
            ))
        else:
            capacity = total_capacity(sector_sizes)
            for p in participants:
                if p.place and p.place > capacity:
                    warnings.append(ValidationError(
                        error_type="PLACE_OUTSIDE_SECTORS",
                        severity=ValidationSeverity.MEDIUM,
                        message=f"Draw position {p.place} of {p.name} is outside all sectors",
                        field="place",
                        value=p.place,
                        suggestion=f"Sectors cover positions 1-{capacity}",
                    ))

        return _result(errors, warnings)

    def validate_weighing(self, participants: Sequence[ParticipantSchema]) -> ValidationResult:
        errors = []

        unconfirmed = [p for p in participants if p.weights and not p.weighing_confirmed]
        if unconfirmed:
            errors.append(ValidationError(
                error_type="UNCONFIRMED_WEIGHING",
                severity=ValidationSeverity.HIGH,
                message=f"There are unconfirmed weigh-ins. Confirm the weigh-in of {unconfirmed[0].name} first.",
                field="weighing_confirmed",
                value=unconfirmed[0].id,
            ))

        return _result(errors, [])

    def validate_for_save(self, competition: SavedCompetitionSchema) -> ValidationResult:
        """All checks for a finalized result set"""
        result = (
            self.validate_details(competition)
            .merge(self.validate_registration(competition.participants))
            .merge(self.validate_placement(competition.participants, competition.sector_sizes))
            .merge(self.validate_weighing(competition.participants))
        )
        if not result.is_valid:
            logger.info(f"Competition {competition.name!r} failed validation: {len(result.errors)} error(s)")
        return result
