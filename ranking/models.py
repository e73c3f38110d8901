"""
Ranking data classes

Plain in-memory shapes passed between the ranking functions.
- Participant / ParticipantResult: one event, one angler (or pair)
- EventEntry / EventResult: a finalized event as the criterium sees it
- CompetitionResult / StandingsRow / Standings: cumulative criterium table
"""
from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field, asdict


# =====================================================
# Single event
# =====================================================

@dataclass
class Participant:
    """Registered participant of one event"""
    id: int
    name: str
    club: Optional[str] = None
    klasse: Optional[str] = None
    place: Optional[int] = None  # draw position
    weights: List[Optional[int]] = field(default_factory=list)  # grams
    weighing_confirmed: bool = False
    has_paid: bool = False


@dataclass
class ParticipantResult:
    """Participant with computed sector, total weight and points"""
    participant: Participant
    sector: str
    total_weight: int
    points: Optional[int]  # None when the participant has no draw position
    rank: int = 0          # 1..N row number of the event placing

    @property
    def name(self) -> str:
        return self.participant.name

    @property
    def place(self) -> Optional[int]:
        return self.participant.place

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.participant.id,
            "name": self.participant.name,
            "club": self.participant.club,
            "klasse": self.participant.klasse,
            "place": self.participant.place,
            "weights": list(self.participant.weights),
            "weighingConfirmed": self.participant.weighing_confirmed,
            "hasPaid": self.participant.has_paid,
            "sector": self.sector,
            "totalWeight": self.total_weight,
            "points": self.points,
            "rank": self.rank,
        }


# =====================================================
# Criterium
# =====================================================

@dataclass
class EventEntry:
    """One participant line of a finalized event"""
    name: str
    points: Optional[int]
    total_weight: int
    klasse: Optional[str] = None


@dataclass
class EventResult:
    """Finalized event result set, reduced to what the criterium needs"""
    label: str
    participants: List[EventEntry] = field(default_factory=list)


@dataclass
class CompetitionResult:
    """A participant's slot for one event of the criterium"""
    points: int
    weight: int
    present: bool
    excluded: bool = False


@dataclass
class StandingsRow:
    """Cumulative criterium line of one participant"""
    name: str
    klasse: str
    competitions: List[CompetitionResult]
    total_points: int = 0
    total_weight: int = 0
    current_rank: int = 0


@dataclass
class Standings:
    """Criterium standings table"""
    event_labels: List[str]
    participants: List[StandingsRow]
    penalty_points: int
    exclude_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "eventLabels": list(self.event_labels),
            "penaltyPoints": self.penalty_points,
            "excludeCount": self.exclude_count,
            "participants": [
                {
                    "rank": row.current_rank,
                    "name": row.name,
                    "klasse": row.klasse,
                    "perEvent": [asdict(c) for c in row.competitions],
                    "totalPoints": row.total_points,
                    "totalWeight": row.total_weight,
                }
                for row in self.participants
            ],
        }

    def to_rows(self) -> List[List[Any]]:
        """Flat table for spreadsheet/PDF sinks; excluded cells are parenthesised"""
        header: List[Any] = ["Ranking", "Klasse", "Naam"]
        for i in range(len(self.event_labels)):
            header.append(f"W{i + 1} Ptn")
            header.append(f"W{i + 1} Gewicht")
        header.extend(["Totaal Ptn", "Totaal Gewicht"])

        rows: List[List[Any]] = [header]
        for row in self.participants:
            line: List[Any] = [row.current_rank, row.klasse, row.name]
            for comp in row.competitions:
                points = comp.points if comp.present else self.penalty_points
                if comp.excluded:
                    line.append(f"({points})")
                    line.append(f"({comp.weight})")
                else:
                    line.append(points)
                    line.append(comp.weight)
            line.extend([row.total_points, row.total_weight])
            rows.append(line)
        return rows
