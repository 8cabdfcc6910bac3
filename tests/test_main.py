"""Tests for the command-line interface."""
import json

from pd_playground.config import PlayerConfig
from pd_playground.main import main, parse_player


class TestParsePlayer:
    """Test --player parsing."""

    def test_name_and_strategy(self):
        assert parse_player("Alice = Grim Trigger") == PlayerConfig(name="Alice", strategy="Grim Trigger")

    def test_strategy_only(self):
        assert parse_player("pavlov") == PlayerConfig(strategy="Pavlov")


class TestMain:
    """Test running the CLI end to end."""

    def test_list(self, capsys):
        assert main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "Generous Tit for Tat" in out
        assert "Random" in out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_instant_game(self, capsys):
        code = main([
            "play", "--player", "Tit for Tat", "--player", "Always Defect",
            "--rounds", "10", "--speed", "instant", "--history",
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "Round History" in out
        assert "Rounds played: 10/10" in out

    def test_unknown_strategy_exits_with_error(self, capsys):
        code = main(["play", "--player", "Tit for Tat", "--player", "Nope", "--speed", "instant"])
        assert code == 2
        assert "Unknown strategy" in capsys.readouterr().err

    def test_bad_rounds(self, capsys):
        code = main(["play", "--rounds", "0", "--speed", "instant"])
        assert code == 2
        assert "max_rounds" in capsys.readouterr().err

    def test_config_file_and_export(self, tmp_path, capsys):
        config = tmp_path / "game.json"
        config.write_text(json.dumps({
            "max_rounds": 3,
            "speed": "instant",
            "players": [{"name": "Coop", "strategy": "Always Cooperate"}, "Always Defect"],
        }))
        out_path = tmp_path / "result.json"
        code = main([
            "play", "--config", str(config), "--export", "json", "--output", str(out_path),
        ])
        assert code == 0
        data = json.loads(out_path.read_text())
        assert [s["score"] for s in data["standings"]] == [15, 0]
        assert "Coop" in capsys.readouterr().out

    def test_paced_game_prints_each_round(self, monkeypatch, capsys):
        monkeypatch.setattr("pd_playground.simulator.time.sleep", lambda _: None)
        code = main(["play", "--rounds", "2", "--speed", "slow"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Round 1" in out
        assert "Round 2" in out

    def test_non_string_strategy_in_config(self, tmp_path, capsys):
        config = tmp_path / "game.json"
        config.write_text(json.dumps({"speed": "instant", "players": [{"strategy": None}, "Pavlov"]}))
        code = main(["play", "--config", str(config)])
        assert code == 2
        assert "must be a string" in capsys.readouterr().err
