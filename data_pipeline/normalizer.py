"""
Record normalization
- saved_competitions rows <-> SavedCompetitionSchema
- registration cleanup (blank rows, renumbering)
- backup export/import payloads
"""
import json
from datetime import datetime
from typing import Optional, Dict, Any, List, Sequence

from loguru import logger

from ranking.models import ParticipantResult
from .schemas import (
    ParticipantSchema,
    SavedCompetitionSchema,
    CriteriumFolderSchema,
    CompetitionType,
    KLASSE_OPTIONS,
    default_sector_sizes,
)


EXPORT_VERSION = 1


# =============================================================================
# Field normalization
# =============================================================================

def normalize_name(name: Optional[str]) -> str:
    """Trim and collapse inner whitespace"""
    return " ".join((name or "").split())


def name_key(name: Optional[str]) -> str:
    """Case-insensitive identity used for duplicate checks within an event"""
    return normalize_name(name).lower()


def normalize_klasse(klasse: Optional[str]) -> Optional[str]:
    """Known class labels are upper-cased; empty means none"""
    if not klasse or not klasse.strip():
        return None
    value = klasse.strip()
    upper = value.upper()
    return upper if upper in KLASSE_OPTIONS else value


# =============================================================================
# Stored rows
# =============================================================================

def row_to_competition(row: Dict[str, Any]) -> SavedCompetitionSchema:
    """
    saved_competitions row -> schema

    participants may come back as a JSON string depending on the column type.
    """
    participants = row.get("participants") or []
    if isinstance(participants, str):
        participants = json.loads(participants)

    data = dict(row)
    data["participants"] = participants
    data["sector_sizes"] = row.get("sector_sizes") or default_sector_sizes()
    return SavedCompetitionSchema(**data)


def competition_to_row(competition: SavedCompetitionSchema, user_id: Optional[str] = None) -> Dict[str, Any]:
    """schema -> insertable saved_competitions row"""
    return {
        "user_id": user_id or competition.user_id,
        "name": competition.name,
        "date": competition.date.isoformat(),
        "location": competition.location,
        "type": CompetitionType(competition.type).value,
        "criterium_folder_id": competition.criterium_folder_id,
        "participants": [p.model_dump(by_alias=True) for p in competition.participants],
        "sector_sizes": list(competition.sector_sizes),
    }


def row_to_folder(row: Dict[str, Any]) -> CriteriumFolderSchema:
    return CriteriumFolderSchema(**row)


# =============================================================================
# Registration / results
# =============================================================================

def clean_registration(participants: Sequence[ParticipantSchema]) -> List[ParticipantSchema]:
    """
    Drop rows without a name and renumber the rest 1..N

    Totals and points are reset; they are computed again after the weigh-in.
    """
    named = [p for p in participants if p.name.strip()]
    cleaned = [
        p.model_copy(update={
            "id": index,
            "name": normalize_name(p.name),
            "klasse": normalize_klasse(p.klasse),
            "total_weight": 0,
            "points": 0,
        })
        for index, p in enumerate(named, 1)
    ]
    dropped = len(participants) - len(cleaned)
    if dropped:
        logger.debug(f"Registration: {dropped} empty row(s) dropped")
    return cleaned


def results_to_participants(results: Sequence[ParticipantResult]) -> List[ParticipantSchema]:
    """Computed results -> stored participant list (in placing order)"""
    return [ParticipantSchema(**r.to_dict()) for r in results]


# =============================================================================
# Backup file
# =============================================================================

def build_export(
    competitions: Sequence[SavedCompetitionSchema],
    folders: Sequence[CriteriumFolderSchema],
) -> Dict[str, Any]:
    return {
        "version": EXPORT_VERSION,
        "exportedAt": datetime.now().isoformat(),
        "competitions": [c.model_dump(mode="json", by_alias=True) for c in competitions],
        "criteriumFolders": [f.model_dump(mode="json") for f in folders],
    }


def parse_export(data: Dict[str, Any]) -> Dict[str, list]:
    """
    Backup payload -> schemas

    Returns:
        {"competitions": [SavedCompetitionSchema], "folders": [CriteriumFolderSchema]}
    """
    if not isinstance(data, dict) or "competitions" not in data:
        raise ValueError("Not a results backup: 'competitions' missing")

    competitions = [row_to_competition(row) for row in data.get("competitions") or []]
    folders = [row_to_folder(row) for row in data.get("criteriumFolders") or []]
    logger.info(f"Backup loaded: {len(competitions)} competitions, {len(folders)} folders")
    return {"competitions": competitions, "folders": folders}
