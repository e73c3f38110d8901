"""
Criterium standings tests
- union of participants, absence penalty
- worst-result exclusion
- final ordering and table output
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from ranking.models import CompetitionResult, EventEntry, EventResult
from ranking.criterium import (
    calculate_standings,
    competition_label,
    competition_number,
    order_by_competition_number,
    select_exclusions,
)


def event(label, *entries):
    """entries: (name, points, weight[, klasse])"""
    return EventResult(
        label=label,
        participants=[
            EventEntry(name=e[0], points=e[1], total_weight=e[2], klasse=e[3] if len(e) > 3 else None)
            for e in entries
        ],
    )


@pytest.fixture
def season():
    return [
        event("W1", ("Jan", 1, 4000, "S"), ("Piet", 2, 2500, "V"), ("Joris", 3, 1200)),
        event("W2", ("Piet", 1, 3100, "V"), ("Joris", 2, 2000), ("Korneel", 3, 900, "M")),
        event("W3", ("Jan", 4, 300, "S"), ("Piet", 1, 5000, "V"), ("Joris", 1, 2200)),
    ]


def row_of(standings, name):
    return next(r for r in standings.participants if r.name == name)


# =============================================================================
# Aggregation
# =============================================================================

class TestCalculateStandings:
    """Season table over a folder's events"""

    def test_absence_excluded_first(self):
        events = [
            event("W1", ("X", 1, 500)),
            event("W2", ("Y", 1, 300)),
        ]
        standings = calculate_standings(events, penalty_points=20, exclude_count=1)
        x = row_of(standings, "X")

        assert x.total_points == 1
        assert x.total_weight == 500
        assert x.competitions[0].excluded is False
        assert x.competitions[0].present is True
        assert x.competitions[1].excluded is True
        assert x.competitions[1].present is False

    def test_no_exclusion_counts_everything(self, season):
        standings = calculate_standings(season, penalty_points=20, exclude_count=0)

        for row in standings.participants:
            assert all(not c.excluded for c in row.competitions)

        jan = row_of(standings, "Jan")
        assert jan.total_points == 1 + 20 + 4
        assert jan.total_weight == 4300

    def test_union_of_participants(self, season):
        standings = calculate_standings(season)

        assert sorted(r.name for r in standings.participants) == ["Jan", "Joris", "Korneel", "Piet"]
        korneel = row_of(standings, "Korneel")
        assert [c.present for c in korneel.competitions] == [False, True, False]
        assert korneel.competitions[0].points == 20
        assert korneel.competitions[0].weight == 0

    def test_ranking_order(self, season):
        standings = calculate_standings(season, penalty_points=20, exclude_count=0)

        # Piet 4, Joris 6, Jan 25, Korneel 43
        assert [r.name for r in standings.participants] == ["Piet", "Joris", "Jan", "Korneel"]
        assert [r.current_rank for r in standings.participants] == [1, 2, 3, 4]

    def test_equal_points_heavier_first(self):
        events = [event("W1", ("Light", 1, 100), ("Heavy", 1, 900))]
        standings = calculate_standings(events)
        assert [r.name for r in standings.participants] == ["Heavy", "Light"]

    def test_present_worst_result_dropped(self, season):
        standings = calculate_standings(season, penalty_points=20, exclude_count=1)
        piet = row_of(standings, "Piet")

        assert [c.excluded for c in piet.competitions] == [True, False, False]
        assert piet.total_points == 2
        assert piet.total_weight == 8100

    def test_exclude_more_than_events(self, season):
        standings = calculate_standings(season, exclude_count=5)
        for row in standings.participants:
            assert row.total_points == 0
            assert row.total_weight == 0
            assert all(c.excluded for c in row.competitions)

    def test_exclusion_monotonic(self, season):
        for name in ["Jan", "Piet", "Joris", "Korneel"]:
            totals = [
                row_of(calculate_standings(season, penalty_points=20, exclude_count=n), name).total_points
                for n in range(0, 5)
            ]
            assert totals == sorted(totals, reverse=True)

    def test_idempotent(self, season):
        first = calculate_standings(season, penalty_points=15, exclude_count=1).to_dict()
        second = calculate_standings(season, penalty_points=15, exclude_count=1).to_dict()
        assert first == second

    def test_first_klasse_wins(self):
        events = [
            event("W1", ("Jan", 1, 100, "S")),
            event("W2", ("Jan", 1, 100, "V")),
        ]
        assert calculate_standings(events).participants[0].klasse == "S"

    def test_missing_klasse(self, season):
        assert row_of(calculate_standings(season), "Joris").klasse == "-"

    def test_unranked_entry_scores_penalty(self):
        events = [event("W1", ("Jan", None, 700))]
        jan = calculate_standings(events, penalty_points=12).participants[0]

        assert jan.competitions[0].present is True
        assert jan.total_points == 12
        assert jan.total_weight == 700

    def test_blank_names_skipped(self):
        events = [event("W1", ("", 1, 100), ("Jan", 2, 50))]
        assert [r.name for r in calculate_standings(events).participants] == ["Jan"]

    def test_empty_folder(self):
        standings = calculate_standings([])
        assert standings.participants == []
        assert standings.event_labels == []

    @pytest.mark.parametrize("penalty,exclude", [(-1, 0), (20, -1)])
    def test_negative_parameters(self, penalty, exclude):
        with pytest.raises(ValueError):
            calculate_standings([], penalty_points=penalty, exclude_count=exclude)


# =============================================================================
# Exclusion selection
# =============================================================================

class TestSelectExclusions:
    """Which slots of one participant are dropped"""

    def test_none(self):
        results = [CompetitionResult(points=3, weight=100, present=True)]
        assert select_exclusions(results, 0) == []

    def test_absences_before_present(self):
        results = [
            CompetitionResult(points=9, weight=0, present=True),
            CompetitionResult(points=20, weight=0, present=False),
        ]
        assert select_exclusions(results, 1) == [1]

    def test_worst_points_then_lowest_weight(self):
        results = [
            CompetitionResult(points=3, weight=100, present=True),
            CompetitionResult(points=5, weight=200, present=True),
            CompetitionResult(points=5, weight=50, present=True),
        ]
        assert select_exclusions(results, 1) == [2]
        assert select_exclusions(results, 2) == [2, 1]


# =============================================================================
# Output
# =============================================================================

class TestStandingsOutput:
    """to_dict / to_rows"""

    def test_to_dict(self):
        events = [event("W1", ("X", 1, 500, "S")), event("W2", ("Y", 1, 300))]
        data = calculate_standings(events, penalty_points=20, exclude_count=1).to_dict()

        assert data["eventLabels"] == ["W1", "W2"]
        assert data["penaltyPoints"] == 20
        assert data["excludeCount"] == 1
        x = data["participants"][0]
        assert x["name"] == "X"
        assert x["rank"] == 1
        assert x["perEvent"][1] == {"points": 20, "weight": 0, "present": False, "excluded": True}
        assert x["totalPoints"] == 1
        assert x["totalWeight"] == 500

    def test_to_rows(self):
        events = [event("W1", ("X", 1, 500, "S")), event("W2", ("Y", 1, 300))]
        rows = calculate_standings(events, penalty_points=20, exclude_count=1).to_rows()

        assert rows[0] == [
            "Ranking", "Klasse", "Naam",
            "W1 Ptn", "W1 Gewicht", "W2 Ptn", "W2 Gewicht",
            "Totaal Ptn", "Totaal Gewicht",
        ]
        assert rows[1] == [1, "S", "X", 1, 500, "(20)", "(0)", 1, 500]


# =============================================================================
# Folder ordering
# =============================================================================

class TestCompetitionNumbers:
    """W-number parsing and ordering"""

    def test_number(self):
        assert competition_number("W3") == 3
        assert competition_number(" W 12") == 12
        assert competition_number("7") == 7
        assert competition_number("Finale") is None
        assert competition_number("") is None

    def test_label(self):
        assert competition_label(4) == "W4"

    def test_order(self):
        names = ["W10", "Finale", "W2", "W1"]
        assert order_by_competition_number(names, lambda n: n) == ["W1", "W2", "W10", "Finale"]
