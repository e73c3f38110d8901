"""
Fishing competition results - FastAPI server

Exposes the ranking core (event placing, criterium standings) and read
access to the saved results on Supabase.
"""
from typing import List, Optional

from fastapi import FastAPI, Query, HTTPException, Depends
from pydantic import BaseModel, Field
from loguru import logger

from app.config import get_standings_config
from data_pipeline.schemas import (
    ParticipantSchema,
    SavedCompetitionSchema,
    CriteriumFolderSchema,
    CompetitionType,
    FolderType,
    ValidationResult,
    default_sector_sizes,
)
from data_pipeline.validators import EventValidator
from database.supabase_client import SupabaseDB
from ranking.criterium import calculate_standings
from ranking.models import EventEntry, EventResult
from ranking.results import calculate_results
from ranking.weighing import unconfirmed_participants


app = FastAPI(
    title="Fishing Competition Results",
    description="Sector ranking, event results and criterium standings",
    version="1.0.0"
)


def get_db() -> SupabaseDB:
    return SupabaseDB()


# ==================== Pydantic Models ====================

class ResultsPreviewRequest(BaseModel):
    participants: List[ParticipantSchema]
    sector_sizes: List[int] = Field(default_factory=default_sector_sizes, alias="sectorSizes")

    class Config:
        populate_by_name = True


class ResultRow(BaseModel):
    """Placed participant"""
    rank: int
    id: int
    name: str
    club: Optional[str] = None
    klasse: Optional[str] = None
    sector: str
    place: Optional[int] = None
    total_weight: int
    points: Optional[int] = None


class ResultsResponse(BaseModel):
    rows: List[ResultRow]
    unconfirmed: List[str]
    can_save: bool


class StandingsEntryIn(BaseModel):
    name: str
    klasse: Optional[str] = None
    points: Optional[int] = None
    total_weight: int = Field(default=0, ge=0, alias="totalWeight")

    class Config:
        populate_by_name = True


class StandingsEventIn(BaseModel):
    label: str
    participants: List[StandingsEntryIn] = Field(default_factory=list)


class StandingsRequest(BaseModel):
    events: List[StandingsEventIn]
    penalty_points: Optional[int] = Field(None, ge=0, alias="penaltyPoints")
    exclude_count: Optional[int] = Field(None, ge=0, alias="excludeCount")

    class Config:
        populate_by_name = True


# ==================== Helpers ====================

def _results_response(participants: List[ParticipantSchema], sector_sizes: List[int]) -> ResultsResponse:
    core_participants = [p.to_participant() for p in participants]
    try:
        results = calculate_results(core_participants, sector_sizes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    unconfirmed = unconfirmed_participants(core_participants)
    return ResultsResponse(
        rows=[
            ResultRow(
                rank=r.rank,
                id=r.participant.id,
                name=r.name,
                club=r.participant.club,
                klasse=r.participant.klasse,
                sector=r.sector,
                place=r.place,
                total_weight=r.total_weight,
                points=r.points,
            )
            for r in results
        ],
        unconfirmed=[p.name for p in unconfirmed],
        can_save=not unconfirmed,
    )


def _standings(events: List[EventResult], penalty_points: Optional[int], exclude_count: Optional[int]) -> dict:
    config = get_standings_config()
    penalty = config.default_penalty_points if penalty_points is None else penalty_points
    exclude = config.default_exclude_count if exclude_count is None else exclude_count
    try:
        return calculate_standings(events, penalty_points=penalty, exclude_count=exclude).to_dict()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ==================== Endpoints ====================

@app.get("/api/status")
async def api_status():
    return {"status": "ok"}


@app.post("/api/results/preview", response_model=ResultsResponse)
async def api_results_preview(request: ResultsPreviewRequest):
    """
    Event placing for the given participants

    Unconfirmed weigh-ins are included (preview) but reported in `unconfirmed`.
    """
    return _results_response(request.participants, request.sector_sizes)


@app.post("/api/standings")
async def api_standings(request: StandingsRequest):
    """Criterium standings over event result sets supplied by the caller"""
    events = [
        EventResult(
            label=event.label,
            participants=[
                EventEntry(name=p.name, klasse=p.klasse, points=p.points, total_weight=p.total_weight)
                for p in event.participants
            ],
        )
        for event in request.events
    ]
    return _standings(events, request.penalty_points, request.exclude_count)


@app.post("/api/competitions/validate", response_model=ValidationResult)
async def api_validate_competition(competition: SavedCompetitionSchema):
    return EventValidator().validate_for_save(competition)


@app.get("/api/competitions", response_model=List[SavedCompetitionSchema])
async def api_competitions(
    type: CompetitionType = Query(..., description="Competition type"),
    db: SupabaseDB = Depends(get_db),
):
    return await db.get_competitions_by_type(type)


@app.get("/api/competitions/{competition_id}/results", response_model=ResultsResponse)
async def api_competition_results(competition_id: str, db: SupabaseDB = Depends(get_db)):
    competition = await db.get_competition(competition_id)
    if competition is None:
        raise HTTPException(status_code=404, detail="Competition not found")
    return _results_response(competition.participants, competition.sector_sizes)


@app.get("/api/folders", response_model=List[CriteriumFolderSchema])
async def api_folders(
    type: Optional[FolderType] = Query(None, description="individual-criterium or pair-criterium"),
    db: SupabaseDB = Depends(get_db),
):
    if type:
        return await db.get_folders_by_type(type)
    return await db.load_folders()


@app.get("/api/folders/{folder_id}/next-name")
async def api_folder_next_name(folder_id: str, db: SupabaseDB = Depends(get_db)):
    return {"name": await db.get_next_competition_name(folder_id)}


@app.get("/api/folders/{folder_id}/standings")
async def api_folder_standings(
    folder_id: str,
    penalty_points: Optional[int] = Query(None, ge=0, description="Points for a missed event"),
    exclude_count: Optional[int] = Query(None, ge=0, description="Worst results dropped"),
    db: SupabaseDB = Depends(get_db),
):
    """Criterium standings of a folder"""
    folder = await db.get_folder(folder_id)
    if folder is None:
        raise HTTPException(status_code=404, detail="Criterium folder not found")

    competitions = await db.get_competitions_by_folder(folder_id)
    logger.info(f"Standings for {folder.name!r}: {len(competitions)} events")

    standings = _standings(
        [c.to_event_result() for c in competitions],
        penalty_points,
        exclude_count,
    )
    standings["folder"] = {"id": folder.id, "name": folder.name, "type": folder.type}
    return standings


# ==================== Run ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
