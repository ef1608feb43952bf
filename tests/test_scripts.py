"""
Test suite for command-line scripts
Tests scripts/record_match.py and scripts/player_leaderboard.py
"""

import json

import pytest

from database.models import Match, Player
from scripts import player_leaderboard, record_match

pytestmark = pytest.mark.integration


class TestRecordMatchScript:

    def test_records_valid_file(self, app, test_config, tmp_path, match_payload):
        path = tmp_path / "match.json"
        path.write_text(json.dumps(match_payload), encoding="utf-8")

        exit_code = record_match.main([str(path), "--config", str(test_config)])

        assert exit_code == 0
        assert Match.query.count() == 1
        assert Player.query.count() == 8

    def test_reports_invalid_files(self, app, test_config, tmp_path, match_payload, capsys):
        match_payload.pop("overs")
        invalid = tmp_path / "invalid.json"
        invalid.write_text(json.dumps(match_payload), encoding="utf-8")
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")

        exit_code = record_match.main([str(invalid), str(broken), "--config", str(test_config)])

        assert exit_code == 1
        out = capsys.readouterr().out
        assert "overs" in out
        assert "Could not read" in out
        assert Match.query.count() == 0

    def test_record_files_counts_failures(self, recorder, tmp_path, match_payload):
        good = tmp_path / "good.json"
        good.write_text(json.dumps(match_payload), encoding="utf-8")
        missing = tmp_path / "missing.json"

        assert record_match.record_files(recorder, [str(good), str(missing)]) == 1


class TestLeaderboardScript:

    def test_render_txt(self, stats_service, recorder, match_payload):
        recorder.record_match(match_payload)
        output = player_leaderboard.render(stats_service, "txt", limit=2)
        assert "PLAYER CAREER STATISTICS" in output
        assert "MOST RUNS" in output
        assert "MOST WICKETS" in output
        assert "Arjun" in output

    def test_render_csv(self, stats_service, recorder, match_payload):
        recorder.record_match(match_payload)
        output = player_leaderboard.render(stats_service, "csv")
        assert output.splitlines()[0].startswith("player,matches,runs")

    def test_render_empty(self, stats_service):
        output = player_leaderboard.render(stats_service, "txt")
        assert "No data available" in output
