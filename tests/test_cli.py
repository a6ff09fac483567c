"""Tests for the glide-snake CLI."""

import json

from glide_snake.cli import _build_parser, main
from glide_snake.highscores import HighScoreTable


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.games == 10
        assert args.seed == 0
        assert args.config is None
        assert args.highscores is None

    def test_simulate_flags(self):
        args = _build_parser().parse_args([
            "simulate", "--games", "3", "--turn-chance", "0.5",
            "--frame-ms", "8",
        ])
        assert args.games == 3
        assert args.turn_chance == 0.5
        assert args.frame_ms == 8.0


class TestCLICommands:
    def test_simulate_prints_summary(self, capsys):
        assert main([
            "simulate", "--games", "2", "--turn-chance", "0", "--max-frames", "500",
        ]) == 0
        assert "Simulation: 2 games" in capsys.readouterr().out

    def test_simulate_records_and_lists_highscores(self, tmp_path, capsys):
        path = tmp_path / "hs.json"
        main([
            "simulate", "--games", "2", "--turn-chance", "0",
            "--max-frames", "500", "--highscores", str(path),
        ])
        assert len(json.loads(path.read_text())["entries"]) == 2
        capsys.readouterr()

        assert main(["highscores", str(path)]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0].startswith("#1")
        assert len(lines) == 2

    def test_highscores_empty(self, tmp_path, capsys):
        assert main(["highscores", str(tmp_path / "none.json")]) == 0
        assert "No high scores yet." in capsys.readouterr().out

    def test_config_written(self, tmp_path):
        out = tmp_path / "game.json"
        assert main(["config", str(out)]) == 0
        assert json.loads(out.read_text())["max_grid_size"] == 36

    def test_simulate_with_config(self, tmp_path, capsys):
        cfg = tmp_path / "game.json"
        cfg.write_text(json.dumps({"base_tick_ms": 50.0}))
        assert main([
            "simulate", "--games", "1", "--turn-chance", "0",
            "--max-frames", "200", "--config", str(cfg),
        ]) == 0
        assert "1 games" in capsys.readouterr().out

    def test_highscores_respects_config_limit(self, tmp_path, capsys):
        path = tmp_path / "hs.json"
        table = HighScoreTable(path, limit=7)
        for score in range(7):
            table.add(score, 1000.0)
        cfg = tmp_path / "game.json"
        cfg.write_text(json.dumps({"highscore_limit": 7}))

        assert main(["highscores", str(path), "--config", str(cfg)]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 7
        assert len(json.loads(path.read_text())["entries"]) == 7
