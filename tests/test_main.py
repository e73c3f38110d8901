"""
Command line tests (backup file input)
"""
import json
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import main


@pytest.fixture
def backup_file(tmp_path, competition_row, folder_row):
    second = dict(competition_row)
    second.update(
        id="comp-2",
        name="W2",
        date="2024-06-09",
        participants=[
            {"id": 1, "name": "Jan", "klasse": "S", "place": 1, "weights": [900],
             "weighingConfirmed": True, "totalWeight": 900, "points": 1},
            {"id": 2, "name": "Piet", "klasse": "V", "place": 2, "weights": [400],
             "weighingConfirmed": True, "totalWeight": 400, "points": 2},
        ],
    )
    path = tmp_path / "backup.json"
    path.write_text(json.dumps({
        "version": 1,
        "competitions": [second, competition_row],
        "criteriumFolders": [folder_row],
    }), encoding="utf-8")
    return str(path)


class TestStandingsCommand:
    """main.py standings"""

    def test_json_output(self, backup_file, tmp_path):
        out = tmp_path / "standings.json"

        code = main.main([
            "standings", "--folder", "folder-1", "--data", backup_file,
            "--penalty", "10", "--output", str(out),
        ])

        assert code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["eventLabels"] == ["W1", "W2"]
        assert data["penaltyPoints"] == 10
        # Jan 1+1, Joris 1+10, Piet 2+2, Korneel 2+10
        assert [p["name"] for p in data["participants"]] == ["Jan", "Piet", "Joris", "Korneel"]
        assert data["participants"][0]["totalPoints"] == 2

    def test_table_output(self, backup_file, capsys):
        assert main.main(["standings", "--folder", "folder-1", "--data", backup_file]) == 0

        output = capsys.readouterr().out
        assert "Zomercriterium 2024" in output
        assert "Totaal Ptn" in output

    def test_unknown_folder(self, backup_file):
        assert main.main(["standings", "--folder", "nope", "--data", backup_file]) == 1

    @pytest.mark.parametrize("option", ["--penalty", "--exclude"])
    def test_negative_parameter(self, backup_file, tmp_path, option):
        out = tmp_path / "standings.json"

        code = main.main([
            "standings", "--folder", "folder-1", "--data", backup_file,
            option, "-1", "--output", str(out),
        ])

        assert code == 1
        assert not out.exists()


class TestResultsCommand:
    """main.py results"""

    def test_json_output(self, backup_file, tmp_path):
        out = tmp_path / "results.json"

        code = main.main(["results", "--competition", "comp-1", "--data", backup_file, "--output", str(out)])

        assert code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["competition"] == "W1"
        assert [r["name"] for r in data["results"]] == ["Joris", "Jan", "Piet", "Korneel"]

    def test_unknown_competition(self, backup_file):
        assert main.main(["results", "--competition", "nope", "--data", backup_file]) == 1

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            main.main([])


class TestFolderCompetitions:
    """Folder filter and W-order"""

    def test_order(self, backup_file):
        competitions, _ = main.load_backup(backup_file)
        assert [c.name for c in main.folder_competitions(competitions, "folder-1")] == ["W1", "W2"]
        assert main.folder_competitions(competitions, "other") == []
